from src.identifiers.documents.controller_document import ControllerDocument


def controller_document_to_dto(document: ControllerDocument) -> dict:
    return document.to_dict()


def key_list_to_dto(identifier_id: str, keys: list[dict]) -> dict:
    return {
        "identifier": identifier_id,
        "count": len(keys),
        "keys": keys,
    }
