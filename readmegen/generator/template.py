"""Template README built from a digest when no model could be used."""

from __future__ import annotations

import re

from readmegen.digest.assembler import TECHNOLOGIES_HEADER

TEMPLATE_MODEL = "template"

_PACKAGE_NAME = re.compile(r'"name":\s*"([^"]+)"')


def _header_value(digest: str, label: str) -> str | None:
    match = re.search(rf"^{label}: (.+)$", digest, re.MULTILINE)
    return match.group(1).strip() if match else None


def _technologies(digest: str) -> list[str]:
    """Collect names from the Languages/Frameworks/Tools lines of the summary."""
    _, sep, section = digest.rpartition(TECHNOLOGIES_HEADER)
    if not sep:
        return []
    names: list[str] = []
    for line in section.splitlines():
        label, colon, values = line.partition(":")
        if colon and label.strip() in ("Languages", "Frameworks", "Tools"):
            names.extend(v.strip() for v in values.split(",") if v.strip())
    return names


def _install_block(technologies: list[str]) -> tuple[str, str, str]:
    if "npm/Node.js" in technologies:
        return "bash", "npm install", "npm start"
    if "Python" in technologies:
        return "bash", "pip install -r requirements.txt", "python -m <package>"
    return "bash", "# see project documentation", "# see project documentation"


def render_template_readme(digest: str) -> str:
    """Render a generic README from the metadata and technology blocks."""
    name = _header_value(digest, "Repository")
    if not name:
        match = _PACKAGE_NAME.search(digest)
        name = match.group(1) if match else "Project"

    description = _header_value(digest, "Description")
    technologies = _technologies(digest)
    if not description or description == "No description provided":
        kind = ", ".join(technologies) if technologies else "software"
        description = f"This project appears to be a {kind} project."

    lang, install, run = _install_block(technologies)
    tech_lines = "\n".join(f"- {t}" for t in technologies) or "- Not detected"
    license_name = _header_value(digest, "License")
    if not license_name or license_name == "No license":
        license_name = "See repository for license information."

    return (
        f"# {name}\n\n"
        f"## Description\n{description}\n\n"
        f"## Technologies Used\n{tech_lines}\n\n"
        f"## Installation\n```{lang}\n{install}\n```\n\n"
        f"## Usage\n```{lang}\n{run}\n```\n\n"
        "## Contributing\n"
        "Pull requests are welcome. For major changes, please open an issue first.\n\n"
        f"## License\n{license_name}\n\n"
        "---\n"
        "*This README was generated automatically. Please customize it according "
        "to your project's specific needs.*\n"
    )
