"""Integration tests for media API routes."""

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _upload(api_client, headers, name="photo.png", mime="image/png", data=PNG_BYTES):
    return api_client.post(
        "/api/media/upload",
        files={"file": (name, data, mime)},
        data={"alt_text": "A photo"},
        headers=headers,
    )


def test_upload_stores_object_and_row(api_client, author, storage, media_repo, clock):
    user, headers = author

    resp = _upload(api_client, headers)

    assert resp.status_code == 201
    media = resp.json()["media"]
    millis = int(clock.now_utc().timestamp() * 1000)
    assert media["filename"] == f"{millis}-photo.png"
    assert media["originalname"] == "photo.png"
    assert media["alt_text"] == "A photo"
    assert media["owner_id"] == user.id
    assert media["url"].endswith(media["filename"])
    assert storage.objects[media["filename"]] == (PNG_BYTES, "image/png")
    assert len(media_repo.media) == 1


def test_upload_requires_auth(api_client, storage):
    resp = api_client.post("/api/media/upload", files={"file": ("a.png", PNG_BYTES, "image/png")})

    assert resp.status_code == 401
    assert storage.objects == {}


def test_upload_without_file(api_client, author):
    _, headers = author

    resp = api_client.post("/api/media/upload", data={"alt_text": "x"}, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "No file uploaded"


def test_upload_rejects_mime_type(api_client, author, storage):
    _, headers = author

    resp = _upload(api_client, headers, name="run.sh", mime="text/x-shellscript", data=b"echo")

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid file type. Only images and PDFs are allowed."
    assert storage.objects == {}


def test_list_get_delete(api_client, author, other_author, storage):
    _, headers = author
    _, other_headers = other_author
    media_id = _upload(api_client, headers).json()["media"]["id"]

    listed = api_client.get("/api/media", headers=headers).json()["media"]
    assert [m["id"] for m in listed] == [media_id]
    assert api_client.get("/api/media", headers=other_headers).json()["media"] == []

    assert api_client.get(f"/api/media/{media_id}", headers=other_headers).status_code == 404
    assert api_client.delete(f"/api/media/{media_id}", headers=other_headers).status_code == 404

    assert api_client.delete(f"/api/media/{media_id}", headers=headers).status_code == 200
    assert storage.objects == {}
    assert api_client.get(f"/api/media/{media_id}", headers=headers).status_code == 404
