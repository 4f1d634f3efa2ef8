"""Template loading and placeholder substitution.

Templates are plain HTML files containing literal placeholder tokens.
Each TemplateSpec declares which tokens a template recognizes, how a token
is spelled, and whether a value replaces every occurrence or only the first.
Tokens a TemplateSpec does not declare are left in the output verbatim.
"""

import json
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from yield_reports.reports.errors import TemplateError

logger = logging.getLogger(__name__)


class SubstitutionMode(str, Enum):
    """How many occurrences of a token get replaced."""
    GLOBAL = "global"
    FIRST = "first"


class TemplateSpec(BaseModel):
    """Declaration of a template file and the placeholders it accepts."""
    filename: str = Field(..., description="File name inside the template directory")
    placeholders: list[str] = Field(default_factory=list, description="Recognized placeholder names")
    token_format: str = Field("{{%s}}", description="Token spelling, %s is the placeholder name")
    mode: SubstitutionMode = SubstitutionMode.GLOBAL

    def token(self, name: str) -> str:
        return self.token_format % name


SUMMARY_TEMPLATE = TemplateSpec(
    filename="summary.html",
    placeholders=[
        "TITLE",
        "DESCRIPTION",
        "IMG_SRC",
        "IMG_ALT",
        "TABLE_HEADER",
        "TABLE_ROWS",
        "CHART_TYPE",
        "CHART_CAPTION",
        "CHART_JSON",
        "NAV_LINKS",
    ],
)

COMPARE_TEMPLATE = TemplateSpec(
    filename="compare.html",
    placeholders=["CHART_DATA"],
    token_format="$$$%s$$$",
    mode=SubstitutionMode.FIRST,
)

HOME_TEMPLATE = TemplateSpec(
    filename="home.html",
    placeholders=["TITLE"],
)


def substitute(text: str, spec: TemplateSpec, values: Mapping[str, str]) -> str:
    """Replace the spec's placeholder tokens in `text` with `values`.

    All tokens are replaced in a single scan, so text inserted for one
    placeholder is never searched for another. In FIRST mode only the first
    occurrence of each token is replaced. Placeholders without a value are
    left as-is.

    Raises:
        ValueError: If `values` names a placeholder `spec` does not declare.
    """
    unknown = sorted(set(values) - set(spec.placeholders))
    if unknown:
        raise ValueError(f"Unknown placeholders for {spec.filename}: {unknown}")

    by_token = {spec.token(name): values[name] for name in spec.placeholders if name in values}
    if not by_token:
        return text

    # Longest first so a token never shadows a longer one it prefixes
    pattern = re.compile("|".join(re.escape(t) for t in sorted(by_token, key=len, reverse=True)))
    replaced: set[str] = set()

    def _replace(match: re.Match) -> str:
        token = match.group(0)
        if spec.mode == SubstitutionMode.FIRST:
            if token in replaced:
                return token
            replaced.add(token)
        return by_token[token]

    return pattern.sub(_replace, text)


def json_for_html(data: Any) -> str:
    """Serialize `data` as JSON that is safe to embed in an HTML page.

    <, > and & are written as unicode escapes, so the result stays valid
    JSON but can never close a <script> element or open a tag.
    """
    return (
        json.dumps(data, ensure_ascii=False)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


class TemplateLoader:
    """Reads template files from a directory on every request (no caching)."""

    def __init__(self, template_dir: Path):
        self.template_dir = Path(template_dir)

    def path_for(self, filename: str) -> Path:
        path = (self.template_dir / filename).resolve()
        if self.template_dir.resolve() not in path.parents:
            raise TemplateError(f"Template outside template directory: {filename}")
        return path

    def load(self, filename: str) -> str:
        """Read a template as UTF-8 text.

        Raises:
            TemplateError: If the file is missing or unreadable.
        """
        path = self.path_for(filename)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read template {path}: {e}")
            raise TemplateError(str(e))

    async def render(self, spec: TemplateSpec, values: Mapping[str, str]) -> str:
        """Load the spec's file off the event loop and substitute `values`."""
        text = await run_in_threadpool(self.load, spec.filename)
        return substitute(text, spec, values)
