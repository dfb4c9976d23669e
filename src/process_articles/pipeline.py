"""Per-article pipeline: transform, render, store."""

import logging
from datetime import date

from common.aws import build_news_key
from process_articles.markdown import render_markdown, sanitize_markdown
from process_articles.models import Article, ArticleResult, ProcessDeps
from process_articles.transform import transform_article

logger = logging.getLogger(__name__)


def process_article(
    article: Article,
    category: str,
    index: int,
    run_date: date,
    deps: ProcessDeps,
) -> ArticleResult:
    """
    Clean, render and upload one article.

    Best-effort: any failure is logged and returned in the result instead of
    raised. A cleaning failure does not stop the upload; the uncleaned fields
    are rendered instead.

    Args:
        article: Article from the extraction service
        category: Category label, part of the object key
        index: Position of the article within its category batch
        run_date: Calendar day of the run, part of the object key
        deps: Shared collaborators

    Returns:
        ArticleResult with the stored key, or with ``error`` set
    """
    label = f"{category}_{index}"
    key = build_news_key(run_date, category, index, deps.key_prefix)

    try:
        outcome = transform_article(article, deps.cleaner, deps.transform, label=label)
        markdown = sanitize_markdown(render_markdown(outcome.article))
        deps.store.put(key, markdown)
    except Exception as e:
        logger.error("Failed to process article %s: %s", label, e)
        return ArticleResult(category=category, index=index, error=str(e))

    logger.info("Uploaded article %s to %s", label, key)
    return ArticleResult(
        category=category,
        index=index,
        key=key,
        failed_fields=outcome.failed_fields,
    )
