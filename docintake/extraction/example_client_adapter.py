"""Offline extraction client.

Reads labelled values such as ``Surname: DOE`` straight out of the prompt's
document text. Good enough for local runs without an API key, and a
reference for writing new provider adapters.
"""

import json
import re

from docintake.extraction.client_base import BaseExtractionClient, CompletionRequest

# Label (lowercased) -> (field_name, field_category)
LABELS: dict[str, tuple[str, str]] = {
    "surname": ("last_name", "personal"),
    "last name": ("last_name", "personal"),
    "given names": ("first_name", "personal"),
    "first name": ("first_name", "personal"),
    "date of birth": ("date_of_birth", "personal"),
    "nationality": ("nationality", "personal"),
    "passport no": ("passport_number", "identification"),
    "passport number": ("passport_number", "identification"),
    "visa number": ("visa_number", "identification"),
    "email": ("email", "contact"),
}

EXAMPLE_CONFIDENCE = 0.5

_DOCUMENT_TEXT = re.compile(r"DOCUMENT TEXT:\n(?P<text>.*?)\n\nAVAILABLE FIELDS", re.DOTALL)
_LABEL_ALTERNATION = "|".join(re.escape(label) for label in sorted(LABELS, key=len, reverse=True))
_LABEL = re.compile(rf"\b(?P<label>{_LABEL_ALTERNATION})\s*:\s*", re.IGNORECASE)


class ExampleClientAdapter(BaseExtractionClient):
    """Answers without any network call."""

    def complete(self, request: CompletionRequest) -> str:
        match = _DOCUMENT_TEXT.search(request.user_prompt)
        fields = extract_labelled_fields(match.group("text") if match else "")
        return json.dumps(
            {
                "document_type": None,
                "extracted_fields": fields,
                "extraction_notes": ["example provider: labelled values only"],
            }
        )


def extract_labelled_fields(text: str) -> list[dict[str, object]]:
    """A label's value runs until the next known label or the end of the line."""
    labels = list(_LABEL.finditer(text))
    fields: list[dict[str, object]] = []
    seen: set[str] = set()
    for i, label in enumerate(labels):
        end = labels[i + 1].start() if i + 1 < len(labels) else len(text)
        lines = text[label.end():end].strip().splitlines()
        value = lines[0].strip() if lines else ""
        field_name, category = LABELS[label.group("label").lower()]
        if not value or field_name in seen:
            continue
        seen.add(field_name)
        fields.append(
            {
                "field_name": field_name,
                "field_value": value,
                "confidence_score": EXAMPLE_CONFIDENCE,
                "field_category": category,
                "source_text": f"{label.group(0)}{value}",
            }
        )
    return fields
