#!/usr/bin/env python3
# diary_client.py - client de l'API du journal (remplace l'état global du front)
import argparse
import base64
import getpass
import json
import logging
import mimetypes
import os
import sys
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger("diary_client")

DEFAULT_URL = os.environ.get("DIARY_URL", "http://localhost:8000")
DEFAULT_TIMEOUT = float(os.environ.get("DIARY_TIMEOUT", "30"))
# au-delà, les médias partent un par un après l'enregistrement de l'entrée
INLINE_MEDIA_BYTES = int(os.environ.get("DIARY_INLINE_MEDIA_BYTES", str(2 * 1024 * 1024)))
SESSION_HEADER = "X-Session-Token"


class DiaryApiError(Exception):
    def __init__(self, status, message):
        super().__init__(f"HTTP {status}: {message}" if status else message)
        self.status = status
        self.message = message


@dataclass
class DiarySession:
    """Session explicite, passée à chaque appel (aucun état global)."""
    token: str
    username: str
    expires_at: Optional[str] = None

    def headers(self):
        return {SESSION_HEADER: self.token}


@dataclass
class SaveResult:
    created: bool
    uploaded: int = 0
    failed: list = field(default_factory=list)  # [(nom, erreur)]

    @property
    def partial(self):
        return bool(self.failed)

    @property
    def message(self):
        base = "Entry saved." if self.created else "Entry updated."
        if not self.failed:
            return base
        total = self.uploaded + len(self.failed)
        names = ", ".join(name or "?" for name, _ in self.failed)
        return (f"{base} {len(self.failed)} of {total} media file(s) failed to upload ({names}); "
                "edit the entry to retry.")


def encode_media_file(path):
    p = Path(path)
    mime = mimetypes.guess_type(p.name)[0] or ""
    return {
        "name": p.name,
        "type": mime,
        "data": base64.b64encode(p.read_bytes()).decode("ascii"),
    }


class DiaryClient:
    def __init__(self, base_url=DEFAULT_URL, http=None, timeout=DEFAULT_TIMEOUT, inline_limit=INLINE_MEDIA_BYTES):
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout
        self.inline_limit = inline_limit

    def _request(self, method, path, session=None, **kwargs):
        headers = dict(kwargs.pop("headers", None) or {})
        if session is not None:
            headers.update(session.headers())
        try:
            resp = self.http.request(method, f"{self.base_url}{path}", headers=headers,
                                     timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise DiaryApiError(0, str(e)) from e
        if resp.status_code >= 400:
            try:
                body = resp.json()
                message = body.get("error") if isinstance(body, dict) else None
            except ValueError:
                message = None
            raise DiaryApiError(resp.status_code, message or resp.text or resp.reason)
        return resp

    # ── auth ──
    def login(self, username, password):
        data = self._request("POST", "/api/login", json={"username": username, "password": password}).json()
        return DiarySession(token=data["token"], username=data["username"], expires_at=data.get("expires_at"))

    def logout(self, session):
        self._request("POST", "/api/logout", json={"token": session.token})

    def whoami(self, session):
        return self._request("GET", "/api/whoami", session).json()

    # ── entrées ──
    def list_entries(self, session=None, include_media=False):
        params = {"include_media": "1"} if include_media else None
        return self._request("GET", "/api/entries", session, params=params).json()

    def delete_entry(self, session, entry_id):
        self._request("POST", "/api/delete", session, json={"id": entry_id})

    def save_entry(self, session, entry, media=None):
        """
        Enregistre l'entrée puis ses médias.

        Petit lot : médias envoyés avec l'entrée, remplacement atomique côté serveur.
        Gros lot : entrée d'abord, puis suppression des anciens médias et envoi
        fichier par fichier dans le nouvel ordre. Un échec en cours de route
        laisse l'entrée enregistrée; SaveResult.message le signale.
        """
        payload = dict(entry)
        payload.setdefault("id", str(uuid.uuid4()))
        if media is None:
            resp = self._request("POST", "/api/entries", session, json=payload)
            return SaveResult(created=resp.status_code == 201)

        items = [dict(item, sort_order=i) for i, item in enumerate(media)]
        if sum(len(item["data"]) for item in items) <= self.inline_limit:
            payload["media"] = items
            resp = self._request("POST", "/api/entries", session, json=payload)
            return SaveResult(created=resp.status_code == 201, uploaded=len(items))

        resp = self._request("POST", "/api/entries", session, json=payload)
        result = SaveResult(created=resp.status_code == 201)
        try:
            self.clear_media(session, payload["id"])
        except DiaryApiError as e:
            logger.warning("Could not clear media of %s: %s", payload["id"], e)
            result.failed = [(item.get("name"), e.message) for item in items]
            return result
        for item in items:
            try:
                self.upload_media(session, payload["id"], item)
                result.uploaded += 1
            except DiaryApiError as e:
                logger.warning("Upload of %s failed: %s", item.get("name"), e)
                result.failed.append((item.get("name"), e.message))
        return result

    # ── médias ──
    def get_media(self, entry_id, session=None):
        return self._request("GET", "/api/media", session, params={"entry_id": entry_id}).json()

    def upload_media(self, session, entry_id, item):
        body = dict(item, entry_id=entry_id)
        return self._request("POST", "/api/media", session, json=body).json().get("id")

    def clear_media(self, session, entry_id):
        self._request("DELETE", "/api/media", session, params={"entry_id": entry_id})


def _session_from_args(args):
    token = args.token or os.environ.get("DIARY_TOKEN")
    if not token:
        print("Aucun jeton : lance d'abord `login` puis exporte DIARY_TOKEN.", file=sys.stderr)
        sys.exit(2)
    return DiarySession(token=token, username=os.environ.get("DIARY_USER", ""))


def build_parser():
    p = argparse.ArgumentParser(prog="diary_client", description="Client de l'API du journal")
    p.add_argument("--url", default=DEFAULT_URL)
    p.add_argument("--token", help="jeton de session (sinon DIARY_TOKEN)")
    sub = p.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login")
    login.add_argument("username")
    login.add_argument("--password")

    sub.add_parser("logout")

    ls = sub.add_parser("list")
    ls.add_argument("--media", action="store_true", help="inclure les médias")

    write = sub.add_parser("write")
    write.add_argument("--id")
    write.add_argument("--title", required=True)
    write.add_argument("--content")
    write.add_argument("--content-file")
    write.add_argument("--date")
    write.add_argument("--mood", default="")
    write.add_argument("--tags", default="")
    write.add_argument("--media", nargs="*", default=None, help="fichiers image/vidéo")

    delete = sub.add_parser("delete")
    delete.add_argument("id")
    return p


def main(argv=None, client=None):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    args = build_parser().parse_args(argv)
    client = client or DiaryClient(args.url)

    try:
        if args.command == "login":
            password = args.password or getpass.getpass("Mot de passe : ")
            session = client.login(args.username, password)
            print(json.dumps({"token": session.token, "username": session.username,
                              "expires_at": session.expires_at}))
        elif args.command == "logout":
            client.logout(_session_from_args(args))
            print("Déconnecté.")
        elif args.command == "list":
            # lecture publique sans jeton; avec jeton pour DIARY_PRIVATE_READS
            session = _session_from_args(args) if (args.token or os.environ.get("DIARY_TOKEN")) else None
            print(json.dumps(client.list_entries(session, include_media=args.media), ensure_ascii=False, indent=2))
        elif args.command == "write":
            content = args.content
            if args.content_file:
                content = Path(args.content_file).read_text(encoding="utf-8")
            entry = {"title": args.title, "content": content or "", "mood": args.mood, "tags": args.tags}
            if args.id:
                entry["id"] = args.id
            if args.date:
                entry["date"] = args.date
            media = [encode_media_file(f) for f in args.media] if args.media is not None else None
            result = client.save_entry(_session_from_args(args), entry, media)
            print(result.message)
            return 1 if result.partial else 0
        elif args.command == "delete":
            client.delete_entry(_session_from_args(args), args.id)
            print("Supprimé.")
    except DiaryApiError as e:
        print(f"Erreur : {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
