import json
from pathlib import Path

from docintake.extraction.exceptions import ExtractionError
from docintake.extraction.models import DocumentTemplate, FieldDefinition

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the extraction prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled extraction_prompt.txt.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the response JSON schema (defaults to extraction_schema.json)."""
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load JSON schema: {exc}") from exc


def load_document_templates(path: Path | None = None) -> dict[str, DocumentTemplate]:
    """Load per-category document templates from field_templates.json.

    Template ``fields`` entries name a field group, optionally narrowed to
    specific fields: ``"identification:visa_number,visa_type"``.

    Raises:
        ExtractionError: if the file cannot be read or references an unknown group.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "field_templates.json"
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ExtractionError(f"Failed to load field templates: {exc}") from exc

    groups = {
        name: [FieldDefinition(**item) for item in items]
        for name, items in raw["field_groups"].items()
    }
    templates: dict[str, DocumentTemplate] = {}
    for category, template_def in raw["templates"].items():
        fields: list[FieldDefinition] = []
        for entry in template_def["fields"]:
            group_name, _, only = entry.partition(":")
            if group_name not in groups:
                raise ExtractionError(
                    f"Template '{category}' references unknown field group '{group_name}'"
                )
            wanted = set(only.split(",")) if only else None
            fields.extend(f for f in groups[group_name] if wanted is None or f.name in wanted)
        templates[category] = DocumentTemplate(
            name=template_def["name"],
            description=template_def["description"],
            fields=fields,
            examples=list(template_def.get("examples", [])),
        )
    return templates
