"""HTML document assembly and report output.

Wraps rendered content in a complete page, or substitutes it into a
user-supplied boilerplate, and writes the result to disk.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from jesthtmlreporter.config import ConfigResolver
from jesthtmlreporter.errors import CANNOT_READ_FILE, CANNOT_WRITE_FILE, THEME_NOT_FOUND, make_error

BOILERPLATE_PLACEHOLDER = "{jesthtmlreporter-content}"
DOCTYPE = "<!DOCTYPE html>"
STYLE_DIR = Path(__file__).parent / "style"


def serialize(element: ET.Element) -> str:
    """Serialize an element tree as HTML."""
    return ET.tostring(element, encoding="unicode", method="html")


def available_themes() -> list[str]:
    """Names of the built-in themes."""
    return sorted(p.stem for p in STYLE_DIR.glob("*.css"))


def theme_path(theme: str) -> Path:
    """Path of a built-in theme stylesheet."""
    path = STYLE_DIR / f"{theme}.css"
    if Path(theme).name != theme or not path.is_file():
        raise make_error(THEME_NOT_FOUND, theme)
    return path


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise make_error(CANNOT_READ_FILE, f"{path} ({e.strerror or e})") from e


def _resolve(config: ConfigResolver, path: str) -> Path:
    resolved = Path(path)
    if not resolved.is_absolute():
        resolved = config.cwd / resolved
    return resolved


def render_boilerplate(content: ET.Element, boilerplate_path: Path) -> str:
    """Replace the placeholder in a boilerplate file with the content."""
    boilerplate = _read_text(boilerplate_path)
    return boilerplate.replace(BOILERPLATE_PLACEHOLDER, serialize(content), 1)


def render_head(config: ConfigResolver) -> ET.Element:
    """``<head>`` with charset, title and the resolved stylesheet."""
    head = ET.Element("head")
    ET.SubElement(head, "meta", {"charset": "utf-8"})
    title = ET.SubElement(head, "title")
    title.text = config.get_str("pageTitle") or ""

    style_override = config.get_str("styleOverridePath")
    if style_override:
        ET.SubElement(head, "link", {"rel": "stylesheet", "type": "text/css", "href": style_override})
        return head

    stylesheet = theme_path(config.get_str("theme") or "")
    if config.get_bool("useCssFile"):
        ET.SubElement(head, "link", {"rel": "stylesheet", "type": "text/css", "href": str(stylesheet)})
    else:
        style = ET.SubElement(head, "style", {"type": "text/css"})
        style.text = _read_text(stylesheet)
    return head


def render_document(content: ET.Element, config: ConfigResolver) -> str:
    """Full report page, or the filled-in boilerplate when one is configured."""
    boilerplate = config.get_str("boilerplatePath")
    if boilerplate:
        return render_boilerplate(content, _resolve(config, boilerplate))

    html = ET.Element("html")
    html.append(render_head(config))
    body = ET.SubElement(html, "body")
    body.append(content)

    custom_script = config.get_str("customScriptPath")
    if custom_script:
        ET.SubElement(body, "script", {"src": custom_script})

    return f"{DOCTYPE}\n{serialize(html)}"


def write_report(report: str, output_path: Path, append: bool = False) -> Path:
    """Write (or append) the report, creating parent directories.

    Returns:
        The path written to.
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("a" if append else "w", encoding="utf-8") as f:
            f.write(report)
    except OSError as e:
        raise make_error(CANNOT_WRITE_FILE, f"{output_path} ({e.strerror or e})") from e
    return output_path
