"""README scraping: usage examples, cleanup and title extraction.

All functions are pure. Language detection is an ordered table of
(predicate, label) pairs evaluated top to bottom; the first match wins, so
the order of ``_LANGUAGE_RULES`` is part of the behavior.
"""
from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from constants import Constants

logger = logging.getLogger(__name__)

USAGE_KEYWORDS = (
    "usage", "example", "examples", "getting started", "quick start",
    "how to use", "basic usage", "tutorial", "guide", "documentation",
    "getting-started", "quickstart", "quick-start",
)

_HEADER_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_FENCED_RE = re.compile(r"```(\w+)?\n([\s\S]*?)```")
_INDENTED_RE = re.compile(r"(?:^|\n)((?:    |\t).+(?:\n(?:    |\t).+)*)")
_INDENT_PREFIX_RE = re.compile(r"^(    |\t)", re.MULTILINE)


@dataclass
class UsageExample:
    title: str
    code: str
    language: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class _Section:
    title: str
    level: int
    content: str = ""


def _has(*needles: str) -> Callable[[str], bool]:
    return lambda code: any(n in code for n in needles)


# Evaluated against the lowercased code, in order.
_LANGUAGE_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (_has("<dependency>", "<groupid>"), "xml"),
    (_has("implementation", "compile ", "dependencies {"), "gradle"),
    (_has("librarydependencies", "sbt"), "scala"),
    (_has("public class", "import java", "public static void main"), "java"),
    (_has("fun ", "val ", "import kotlin"), "kotlin"),
    (_has("object ", "def ", "import scala"), "scala"),
    (lambda c: "@groovy" in c or ("def " in c and "groovy" in c), "groovy"),
    (lambda c: "<?xml" in c or ("<" in c and ">" in c), "xml"),
    (_has("mvn ", "gradle ", "#!/bin/bash"), "bash"),
]


def detect_language(code: str) -> str:
    """Best guess at the language of a code block; defaults to java."""
    clean = code.strip().lower()
    for predicate, label in _LANGUAGE_RULES:
        if predicate(clean):
            return label
    return "java"


def _split_sections(content: str) -> List[_Section]:
    sections: List[_Section] = []
    current: Optional[_Section] = None
    for line in content.split("\n"):
        header = _HEADER_RE.match(line)
        if header:
            if current is not None:
                sections.append(current)
            current = _Section(title=header.group(2).strip(), level=len(header.group(1)))
        elif current is not None:
            current.content += line + "\n"
    if current is not None:
        sections.append(current)
    return sections


def _is_usage_section(title: str) -> bool:
    normalized = re.sub(r"[^a-z0-9\s]", " ", title.lower())
    return any(keyword in normalized for keyword in USAGE_KEYWORDS)


def _is_relevant_code(code: str, language: str) -> bool:
    clean = code.strip()
    if len(clean) < 10:
        return False
    if language in ("java", "kotlin", "scala"):
        without_comments = re.sub(r"/\*[\s\S]*?\*/", "", clean)
        without_comments = re.sub(r"//.*$", "", without_comments, flags=re.MULTILINE).strip()
        if len(without_comments) < 5:
            return False
    if language == "xml":
        compact = re.sub(r"\s+", "", clean)
        return len(compact) > 20 and any(
            tag in clean for tag in ("<dependency>", "<groupId>", "<artifactId>")
        )
    return True


def _description_before(content: str, index: int) -> Optional[str]:
    """Up to three non-empty prose lines right above a code block."""
    lines: List[str] = []
    for line in reversed(content[:index].split("\n")):
        trimmed = line.strip()
        if not trimmed:
            if lines:
                break
            continue
        if trimmed.startswith("#"):
            break
        if len(trimmed) > 5 and not trimmed.startswith("```"):
            lines.insert(0, trimmed)
            if len(lines) >= 3:
                break
    description = " ".join(lines).strip()
    return description if len(description) > 10 else None


def _examples_from_section(section: _Section) -> List[UsageExample]:
    examples: List[UsageExample] = []
    content = section.content

    for match in _FENCED_RE.finditer(content):
        code = match.group(2).strip()
        language = match.group(1) or detect_language(match.group(2))
        if code and _is_relevant_code(code, language):
            examples.append(
                UsageExample(
                    title=section.title,
                    code=code,
                    language=language,
                    description=_description_before(content, match.start()),
                )
            )

    for match in _INDENTED_RE.finditer(content):
        code = _INDENT_PREFIX_RE.sub("", match.group(1)).strip()
        if code and _is_relevant_code(code, "java"):
            examples.append(
                UsageExample(
                    title=section.title,
                    code=code,
                    language=detect_language(code),
                    description=_description_before(content, match.start()),
                )
            )
    return examples


def _normalize_code(code: str) -> str:
    collapsed = re.sub(r"\s+", " ", code.lower())
    return re.sub(r"['\"]", "", collapsed).strip()[:100]


def _dedupe(examples: List[UsageExample]) -> List[UsageExample]:
    seen = set()
    unique = []
    for example in examples:
        key = f"{example.language}:{_normalize_code(example.code)}"
        if key not in seen:
            seen.add(key)
            unique.append(example)
    return unique


def extract_usage_examples(readme: str, include_examples: bool = True) -> List[UsageExample]:
    """Code examples from usage-like sections, deduplicated, at most ten."""
    if not include_examples or not readme:
        return []
    sections = _split_sections(readme)
    usage_sections = [s for s in sections if _is_usage_section(s.title)]
    examples: List[UsageExample] = []
    for section in usage_sections:
        examples.extend(_examples_from_section(section))
    unique = _dedupe(examples)
    logger.debug(
        "Extracted usage examples: %d sections, %d usage sections, %d examples",
        len(sections),
        len(usage_sections),
        len(unique),
    )
    return unique[: Constants.MAX_USAGE_EXAMPLES]


def clean_readme_content(content: str) -> str:
    """Drop badges and HTML comments, collapse blank runs, trim trailing spaces."""
    if not content:
        return ""
    cleaned = re.sub(r"\[!\[.*?\]\(.*?\)\]\(.*?\)", "", content)
    cleaned = re.sub(r"!\[.*?\]\(.*?\)", "", cleaned)
    cleaned = re.sub(r"<!--[\s\S]*?-->", "", cleaned)
    cleaned = re.sub(r"[ \t]+$", "", cleaned, flags=re.MULTILINE)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    return cleaned.strip()


def extract_title(content: str) -> Optional[str]:
    """First level-one markdown header, else the first ``<h1>``."""
    if not content:
        return None
    header = re.search(r"^#\s+(.+)$", content, re.MULTILINE)
    if header:
        return header.group(1).strip()
    html = re.search(r"<h1[^>]*>(.*?)</h1>", content, re.IGNORECASE)
    if html:
        return re.sub(r"<[^>]*>", "", html.group(1)).strip()
    return None


def generate_basic_readme(
    group_id: str,
    artifact_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    url: Optional[str] = None,
) -> str:
    """Fallback README built from POM fields when no source host has one."""
    lines = [
        f"# {name or f'{group_id}:{artifact_id}'}",
        "",
        description or "No description available",
        "",
        "## Installation",
        "",
        "### Maven",
        "",
        "```xml",
        "<dependency>",
        f"    <groupId>{group_id}</groupId>",
        f"    <artifactId>{artifact_id}</artifactId>",
        "    <version>VERSION</version>",
        "</dependency>",
        "```",
        "",
        "### Gradle",
        "",
        "```gradle",
        f"implementation '{group_id}:{artifact_id}:VERSION'",
        "```",
        "",
    ]
    if url:
        lines += ["## More Information", "", f"Visit: {url}", ""]
    lines += ["## Usage", "", "Please refer to the official documentation for usage examples.", ""]
    return "\n".join(lines)
