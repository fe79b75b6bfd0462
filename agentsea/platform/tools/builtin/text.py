"""Text analysis and transformation tools."""

import re
from typing import Any, Literal

from pydantic import BaseModel, Field

from agentsea.platform.agent.messages import ToolContext
from agentsea.platform.tools.definition import tool

_EMAIL_RE = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
_URL_RE = re.compile(r"https?://[^\s]+")
_NUMBER_RE = re.compile(r"-?\d+\.?\d*")


class TextSummaryParams(BaseModel):
    text: str = Field(description="Text to process")
    operation: Literal[
        "word_count", "char_count", "extract_emails", "extract_urls", "extract_numbers"
    ] = Field(description="Operation to perform")


class StringTransformParams(BaseModel):
    text: str = Field(description="Text to transform")
    operation: Literal["uppercase", "lowercase", "titlecase", "reverse", "trim", "slug"] = Field(
        description="Transformation to apply"
    )


def _to_number(value: str) -> int | float:
    return float(value) if "." in value else int(value)


@tool(
    name="text_summary",
    description="Summarize or extract key information from text",
    parameters=TextSummaryParams,
)
def text_summary_tool(params: dict[str, Any], context: ToolContext) -> dict[str, Any]:
    text, operation = params["text"], params["operation"]
    match operation:
        case "word_count":
            return {"count": len(text.split()), "operation": operation}
        case "char_count":
            return {
                "count": len(text),
                "with_spaces": len(text),
                "without_spaces": len(re.sub(r"\s", "", text)),
                "operation": operation,
            }
        case "extract_emails":
            emails = _EMAIL_RE.findall(text)
            return {"emails": emails, "count": len(emails), "operation": operation}
        case "extract_urls":
            urls = _URL_RE.findall(text)
            return {"urls": urls, "count": len(urls), "operation": operation}
        case "extract_numbers":
            numbers = [_to_number(match) for match in _NUMBER_RE.findall(text)]
            return {"numbers": numbers, "count": len(numbers), "operation": operation}
        case _:
            raise ValueError(f"Unknown operation: {operation}")


def _slugify(text: str) -> str:
    slug = re.sub(r"[^\w\s-]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug)
    return re.sub(r"--+", "-", slug).strip()


@tool(
    name="string_transform",
    description="Transform strings (uppercase, lowercase, title case, etc.)",
    parameters=StringTransformParams,
)
def string_transform_tool(params: dict[str, Any], context: ToolContext) -> dict[str, str]:
    text, operation = params["text"], params["operation"]
    match operation:
        case "uppercase":
            result = text.upper()
        case "lowercase":
            result = text.lower()
        case "titlecase":
            # Only the first letter of each space-separated word changes
            result = " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))
        case "reverse":
            result = text[::-1]
        case "trim":
            result = text.strip()
        case "slug":
            result = _slugify(text)
        case _:
            raise ValueError(f"Unknown operation: {operation}")
    return {"original": text, "transformed": result, "operation": operation}
