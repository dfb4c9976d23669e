"""Article cleaning through the external cleaning service."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Sequence

from common.config import TransformConfig
from process_articles.clean import CleaningClient
from process_articles.models import Article, TransformOutcome

logger = logging.getLogger(__name__)


def clean_content(
    content: str,
    cleaner: CleaningClient,
    prompts: Sequence[str],
    chain_stages: bool = False,
) -> str:
    """
    Run the content prompts in order and return the last stage's output.

    Args:
        content: Original article content
        cleaner: Cleaning service client
        prompts: Stage prompts, applied in order
        chain_stages: If True, each stage receives the previous stage's output.
            If False, every stage receives the original content and only the
            final stage's output is kept.

    Returns:
        Cleaned content, or the original content when there are no prompts.

    Raises:
        Whatever the failing stage raised; later stages are not run.
    """
    cleaned = content
    for prompt in prompts:
        cleaned = cleaner.clean(cleaned if chain_stages else content, prompt)
    return cleaned


def transform_article(
    article: Article,
    cleaner: CleaningClient,
    config: TransformConfig,
    label: str = "",
) -> TransformOutcome:
    """Clean the content and date fields concurrently.

    Never raises. A field whose cleaning fails keeps its original value and
    is listed in ``TransformOutcome.failed_fields``.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="transform") as executor:
        futures = {
            "content": executor.submit(
                clean_content,
                article.content,
                cleaner,
                config.content_prompts,
                config.chain_content_stages,
            ),
            "date": executor.submit(cleaner.clean, article.date, config.date_prompt),
        }

    cleaned = {}
    failed_fields = []
    for field_name, future in futures.items():
        try:
            cleaned[field_name] = future.result()
        except Exception as e:
            logger.warning("Error cleaning %s for %s: %s", field_name, label or article.title, e)
            failed_fields.append(field_name)

    return TransformOutcome(article=replace(article, **cleaned), failed_fields=failed_fields)
