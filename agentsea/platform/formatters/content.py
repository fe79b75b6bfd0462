"""Content formatter for agent responses.

Converts raw model output into text, markdown, HTML or React-ready HTML,
optionally extracting structural metadata.
"""

import re

import markdown

from agentsea.platform.agent.config import FormatOptions, OutputFormat
from agentsea.platform.agent.messages import ContentMetadata, FormattedContent

_CODE_BLOCK_RE = re.compile(r"```[\s\S]*?```|`[^`]+`")
_TABLE_RE = re.compile(r"\|.*\|")
_LIST_RE = re.compile(r"^\s*[-*+]\s|^\s*\d+\.\s", re.MULTILINE)
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"\son\w+\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE)
_JS_HREF_RE = re.compile(r"href\s*=\s*[\"']javascript:[^\"']*[\"']", re.IGNORECASE)
_CODE_CLASS_RE = re.compile(r'<pre><code class="language-(\w+)">')
_HTML_TAG_RE = re.compile(r"<[a-z][\s\S]*>", re.IGNORECASE)
_MARKDOWN_HINT_RE = re.compile(r"^#{1,6}\s|```|\[.+\]\(.+\)|\*\*.+\*\*|__.+__", re.MULTILINE)

_MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "nl2br"]


class ContentFormatter:
    """Formats raw content for a given output format."""

    @classmethod
    def format(
        cls,
        content: str,
        output_format: OutputFormat,
        options: FormatOptions | None = None,
    ) -> FormattedContent:
        """Format content.

        Args:
            content: Raw model output, treated as markdown
            output_format: Target format
            options: Formatting options

        Returns:
            FormattedContent with the raw and rendered text
        """
        options = options or FormatOptions()
        match output_format:
            case OutputFormat.HTML:
                rendered = cls._render_html(content, options)
            case OutputFormat.REACT:
                rendered = cls._add_react_attributes(cls._to_html(content))
            case OutputFormat.MARKDOWN:
                rendered = content
            case _:
                output_format = OutputFormat.TEXT
                rendered = content

        return FormattedContent(
            raw=content,
            format=output_format,
            rendered=rendered,
            metadata=cls.extract_metadata(content) if options.include_metadata else None,
        )

    @staticmethod
    def extract_metadata(content: str) -> ContentMetadata:
        """Detect code blocks, tables, lists and links in markdown content."""
        return ContentMetadata(
            has_code_blocks=bool(_CODE_BLOCK_RE.search(content)),
            has_tables=bool(_TABLE_RE.search(content)),
            has_lists=bool(_LIST_RE.search(content)),
            links=tuple((m.group(1), m.group(2)) for m in _LINK_RE.finditer(content)),
        )

    @staticmethod
    def _to_html(content: str) -> str:
        return markdown.markdown(content, extensions=_MARKDOWN_EXTENSIONS)

    @classmethod
    def _render_html(cls, content: str, options: FormatOptions) -> str:
        html = cls._to_html(content)
        if options.sanitize_html:
            html = cls.sanitize_html(html)
        if options.highlight_code:
            html = _CODE_CLASS_RE.sub(r'<pre><code class="language-\1 hljs">', html)
        if options.theme:
            html = f'<div class="agentsea-content" data-theme="{options.theme}">{html}</div>'
        return html

    @staticmethod
    def sanitize_html(html: str) -> str:
        """Remove script tags, inline event handlers and javascript: links."""
        html = _SCRIPT_RE.sub("", html)
        html = _EVENT_HANDLER_RE.sub("", html)
        return _JS_HREF_RE.sub("", html)

    @staticmethod
    def _add_react_attributes(html: str) -> str:
        html = html.replace("<pre>", '<pre data-component="code-block">')
        html = html.replace("<table>", '<table data-component="table">')
        return html.replace("<a ", '<a data-component="link" ')

    @staticmethod
    def detect_format(content: str) -> OutputFormat:
        """Guess whether content is HTML, markdown or plain text."""
        if _HTML_TAG_RE.search(content):
            return OutputFormat.HTML
        if _MARKDOWN_HINT_RE.search(content):
            return OutputFormat.MARKDOWN
        return OutputFormat.TEXT
