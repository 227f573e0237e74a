# ticketdesk/utils/mongo_helpers.py
from bson import ObjectId

PRIVATE_FIELDS = ("_id", "__v", "password_hash")


def to_public(doc):
    """
    Strip Mongo control fields (_id, __v) and secrets from a document, and
    turn any nested ObjectId into a string so FastAPI can serialise it.
    Supports dicts, lists and nested documents.
    """
    if not doc:
        return doc

    if isinstance(doc, list):
        return [to_public(d) for d in doc]

    if isinstance(doc, dict):
        new_doc = {}
        for k, v in doc.items():
            if k in PRIVATE_FIELDS:
                continue
            if isinstance(v, ObjectId):
                new_doc[k] = str(v)
            else:
                new_doc[k] = to_public(v)
        return new_doc

    return doc
