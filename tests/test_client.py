import json

import pytest
from rest_framework.test import RequestsClient

from api.models import DiaryEntry, MediaItem
from diary_client import DiaryApiError, DiaryClient, DiarySession, SaveResult, encode_media_file, main
from helpers import PNG_B64, PNG_BYTES


def _item(name, data=PNG_B64):
    return {"name": name, "type": "image/png", "data": data}


@pytest.fixture
def diary(db):
    return DiaryClient("http://testserver", http=RequestsClient())


@pytest.fixture
def session(diary, alice):
    return diary.login("alice", "pw")


def test_login_returns_explicit_session(diary, session):
    assert isinstance(session, DiarySession)
    assert session.username == "alice"
    assert session.headers() == {"X-Session-Token": session.token}
    assert diary.whoami(session)["username"] == "alice"


def test_login_failure_raises_api_error(diary, alice):
    with pytest.raises(DiaryApiError) as err:
        diary.login("alice", "nope")

    assert err.value.status == 401
    assert err.value.message == "Invalid credentials"


def test_small_media_set_goes_inline(diary, session):
    result = diary.save_entry(session, {"id": "e1", "title": "T", "content": "C"}, [_item("a.png"), _item("b.png")])

    assert result == SaveResult(created=True, uploaded=2)
    assert result.message == "Entry saved."
    assert [m["name"] for m in diary.get_media("e1")] == ["a.png", "b.png"]


def test_large_media_set_is_uploaded_one_file_at_a_time(diary, session, monkeypatch):
    diary.inline_limit = 0
    calls = []
    original = diary.upload_media
    monkeypatch.setattr(diary, "upload_media", lambda *a: calls.append(a[2]["name"]) or original(*a))

    result = diary.save_entry(session, {"id": "e1", "title": "T", "content": "C"},
                              [_item("a.png"), _item("b.png"), _item("c.png")])

    assert calls == ["a.png", "b.png", "c.png"]
    assert result.uploaded == 3
    assert not result.partial
    assert [m["sort_order"] for m in diary.get_media("e1")] == [0, 1, 2]


def test_partial_upload_failure_keeps_entry_and_reports(diary, session):
    diary.inline_limit = 0

    result = diary.save_entry(session, {"id": "e1", "title": "T", "content": "C"},
                              [_item("a.png"), _item("b.png", data="!!!"), _item("c.png")])

    assert result.partial
    assert result.uploaded == 2
    assert result.failed == [("b.png", "data: Invalid base64 payload.")]
    assert result.message.startswith("Entry saved. 1 of 3 media file(s) failed to upload (b.png)")
    assert DiaryEntry.objects.filter(pk="e1").exists()
    assert list(MediaItem.objects.filter(entry_id="e1").values_list("name", "sort_order")) == [("a.png", 0), ("c.png", 2)]


def test_sequential_edit_replaces_previous_media(diary, session):
    diary.save_entry(session, {"id": "e1", "title": "T", "content": "C"}, [_item("old1.png"), _item("old2.png")])
    diary.inline_limit = 0

    result = diary.save_entry(session, {"id": "e1", "title": "T2", "content": "C"}, [_item("new.png")])

    assert result.created is False
    assert result.message == "Entry updated."
    assert [m["name"] for m in diary.get_media("e1")] == ["new.png"]


def test_save_without_media_generates_id(diary, session):
    result = diary.save_entry(session, {"title": "T", "content": "C"})

    assert result.created
    assert len(diary.list_entries()) == 1


def test_delete_someone_elses_entry_raises(diary, make_entry, bob):
    make_entry("e1")
    bob_session = diary.login("bob", "pw")

    with pytest.raises(DiaryApiError) as err:
        diary.delete_entry(bob_session, "e1")

    assert err.value.status == 403


def test_logout_invalidates_session(diary, session):
    diary.logout(session)

    with pytest.raises(DiaryApiError) as err:
        diary.whoami(session)
    assert err.value.status == 401


def test_encode_media_file(tmp_path):
    p = tmp_path / "pic.png"
    p.write_bytes(PNG_BYTES)

    assert encode_media_file(p) == {"name": "pic.png", "type": "image/png", "data": PNG_B64}


def test_cli_login_and_write(diary, alice, tmp_path, capsys):
    assert main(["login", "alice", "--password", "pw"], client=diary) == 0
    token = json.loads(capsys.readouterr().out)["token"]
    pic = tmp_path / "pic.png"
    pic.write_bytes(PNG_BYTES)

    code = main(["--token", token, "write", "--id", "e9", "--title", "T", "--content", "C",
                 "--tags", "a,b", "--media", str(pic)], client=diary)

    assert code == 0
    assert capsys.readouterr().out.strip() == "Entry saved."
    entry = DiaryEntry.objects.get(pk="e9")
    assert entry.tags == "a,b"
    assert entry.media.get().name == "pic.png"


def test_cli_reports_api_errors(diary, db, capsys):
    code = main(["--token", "bogus", "delete", "e1"], client=diary)

    assert code == 1
    assert "HTTP 401" in capsys.readouterr().err


def test_cli_list_sends_token_under_private_reads(diary, make_entry, bob, settings, monkeypatch, capsys):
    settings.DIARY_PRIVATE_READS = True
    monkeypatch.delenv("DIARY_TOKEN", raising=False)
    make_entry("mine")
    make_entry("theirs", owner=bob)
    token = diary.login("alice", "pw").token

    code = main(["--token", token, "list"], client=diary)

    assert code == 0
    assert [e["id"] for e in json.loads(capsys.readouterr().out)] == ["mine"]


def test_cli_list_without_token_reads_publicly(diary, make_entry, monkeypatch, capsys):
    monkeypatch.delenv("DIARY_TOKEN", raising=False)
    make_entry("e1")

    code = main(["list"], client=diary)

    assert code == 0
    assert [e["id"] for e in json.loads(capsys.readouterr().out)] == ["e1"]
