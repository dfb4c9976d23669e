import re

from process_articles.models import Article

ANSI_ESCAPE = re.compile(r"\x1B\[[0-9;]*[a-zA-Z]")


def render_markdown(article: Article) -> bytes:
    """Render an article as a title block, content block and date block."""
    title = f"# **제목: {article.title}**"
    content = f"내용: {article.content}"
    date = f"**날짜: {article.date}**"

    return f"{title}\n\n  {content}\n\n  {date}".encode("utf-8", errors="replace")


def sanitize_markdown(markdown: bytes) -> bytes:
    """Replace invalid UTF-8 and strip terminal escape codes before upload."""
    text = markdown.decode("utf-8", errors="replace")
    return ANSI_ESCAPE.sub("", text).encode("utf-8")
