import base64

from api.sessions import open_session

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(32))
PNG_B64 = base64.b64encode(PNG_BYTES).decode("ascii")


def token_header(user):
    return {"HTTP_X_SESSION_TOKEN": open_session(user).token}


def media_payload(entry_id, sort_order=None, name="a.png", data=PNG_B64, type="image/png"):
    body = {"entry_id": entry_id, "name": name, "type": type, "data": data}
    if sort_order is not None:
        body["sort_order"] = sort_order
    return body
