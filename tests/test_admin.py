from api.models import DiaryEntry, MediaItem
from helpers import PNG_B64, token_header


def test_admin_lists_entries_media_and_sessions(admin_client, admin_user, make_entry):
    entry = make_entry("e1", title="Visible")
    MediaItem.objects.create(entry=entry, sort_order=0, name="a.png", data=PNG_B64)
    token_header(admin_user)

    r = admin_client.get("/admin/api/diaryentry/")
    assert r.status_code == 200
    assert "Visible" in r.content.decode()

    assert admin_client.get("/admin/api/diaryentry/e1/change/").status_code == 200
    assert admin_client.get("/admin/api/mediaitem/").status_code == 200
    assert admin_client.get("/admin/api/sessiontoken/").status_code == 200


def test_admin_add_entry_sets_owner(admin_client, admin_user):
    r = admin_client.post("/admin/api/diaryentry/add/", {
        "id": "adm1", "date": "2024-01-01", "title": "From admin", "content": "C",
        "mood": "", "tags": "",
        "media-TOTAL_FORMS": "0", "media-INITIAL_FORMS": "0",
        "media-MIN_NUM_FORMS": "0", "media-MAX_NUM_FORMS": "1000",
    })

    assert r.status_code == 302
    assert DiaryEntry.objects.get(pk="adm1").owner == admin_user
