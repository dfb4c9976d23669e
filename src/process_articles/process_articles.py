"""Fan out article processing over every category and article."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date
from typing import Mapping

from process_articles.models import ArticleResult, CategoryResult, ProcessDeps
from process_articles.pipeline import process_article

logger = logging.getLogger(__name__)


def process_category(
    category: str,
    source_url: str,
    run_date: date,
    deps: ProcessDeps,
) -> CategoryResult:
    """Extract one category's articles and process them concurrently.

    A failed extraction skips the whole category. Returns once every
    article task has finished.
    """
    logger.info("Start to process articles for %s", category)

    try:
        articles = deps.extractor.fetch_articles(source_url)
    except Exception as e:
        logger.error("Failed to get articles for %s: %s", category, e)
        return CategoryResult(category=category, error=str(e))

    if not articles:
        logger.warning("0 Articles extracted for %s", category)
        return CategoryResult(category=category)

    workers = deps.max_article_workers or len(articles)
    results = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix=f"{category}-article") as executor:
        future_map = {
            executor.submit(process_article, article, category, index, run_date, deps): index
            for index, article in enumerate(articles)
        }
        for future in as_completed(future_map):
            index = future_map[future]
            try:
                results.append(future.result())
            except Exception as e:
                logger.error("Article worker %s_%d failed: %s", category, index, e)
                results.append(ArticleResult(category=category, index=index, error=str(e)))

    results.sort(key=lambda r: r.index)
    category_result = CategoryResult(
        category=category,
        articles_found=len(articles),
        results=results,
    )
    logger.info(
        "Finished %s: %d stored, %d failed",
        category,
        category_result.succeeded,
        category_result.failed,
    )
    return category_result


def process_articles(
    categories: Mapping[str, str],
    run_date: date,
    deps: ProcessDeps,
) -> list[CategoryResult]:
    """
    Process every category concurrently and wait for all of them.

    Args:
        categories: Mapping of category label to section page URL
        run_date: Calendar day used for object keys
        deps: Shared collaborators

    Returns:
        One CategoryResult per category, sorted by label
    """
    if not categories:
        logger.warning("No categories to process")
        return []

    logger.info("Processing %d categories for %s", len(categories), run_date.isoformat())

    workers = deps.max_category_workers or len(categories)
    results = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="category") as executor:
        future_map = {
            executor.submit(process_category, category, url, run_date, deps): category
            for category, url in categories.items()
        }
        for future in as_completed(future_map):
            category = future_map[future]
            try:
                results.append(future.result())
            except Exception as e:
                logger.error("Category worker %s failed: %s", category, e)
                results.append(CategoryResult(category=category, error=str(e)))

    results.sort(key=lambda r: r.category)
    return results
