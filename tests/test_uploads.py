from pathlib import Path

from conftest import bearer

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class TestUploads:
    def test_requires_admin(self, client, user):
        files = {"file": ("a.png", PNG, "image/png")}
        assert client.post("/api/upload", files=files).status_code == 401
        assert client.post("/api/upload", files=files, headers=bearer(user)).status_code == 403

    def test_upload_list_delete(self, client, admin, settings):
        headers = bearer(admin)
        response = client.post("/api/upload", files={"file": ("a.png", PNG, "image/png")}, headers=headers)
        assert response.status_code == 201
        url = response.json()["url"]
        assert url.startswith("/images/") and url.endswith(".png")
        assert response.json()["absolute_url"] == f"http://testserver{url}"

        filename = url.rsplit("/", 1)[1]
        assert (Path(settings.UPLOAD_DIR) / filename).read_bytes() == PNG

        listed = client.get("/api/uploads/list", headers=headers).json()
        assert [f["filename"] for f in listed] == [filename]
        assert listed[0]["size"] == len(PNG)

        assert client.delete(f"/api/uploads/{filename}", headers=headers).status_code == 200
        assert client.delete(f"/api/uploads/{filename}", headers=headers).status_code == 404

    def test_rejects_unsupported_type(self, client, admin):
        files = {"file": ("a.pdf", b"%PDF-1.4", "application/pdf")}
        response = client.post("/api/upload", files=files, headers=bearer(admin))
        assert response.status_code == 400

    def test_rejects_large_file(self, client, admin, settings):
        big = b"\x00" * (settings.MAX_UPLOAD_BYTES + 1)
        response = client.post("/api/upload", files={"file": ("big.png", big, "image/png")}, headers=bearer(admin))
        assert response.status_code == 413
        assert response.json() == {"message": "Image too large (max 5MB)."}

    def test_delete_rejects_odd_names(self, client, admin):
        response = client.delete("/api/uploads/..%2Fsecrets.png", headers=bearer(admin))
        assert response.status_code == 404
