from functools import lru_cache
from importlib import resources
import json

import jsonschema


@lru_cache(maxsize=1)
def _controller_document_schema() -> dict:
    with resources.files("src.identifiers.documents.schemas").joinpath("controller_document.schema.json").open("rb") as f:
        return json.load(f)


def validate_controller_document(doc: dict) -> None:
    jsonschema.validate(instance=doc, schema=_controller_document_schema())
