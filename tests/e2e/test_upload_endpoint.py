"""
E2E Tests for Upload Endpoint: POST /api/image
"""

from bson import ObjectId


class TestUploadEndpointSuccess:
    """E2E: Successful upload scenarios"""

    def test_upload_png_returns_201(self, api_client, sample_png) -> None:
        """E2E: Upload of a PNG under the image field returns 201 Created"""
        response = api_client.upload("sample.png", sample_png)

        assert response.status_code == 201
        body = response.json()
        assert body["error"] is False
        assert body["msg"] == "Image uploaded successfully"
        assert ObjectId.is_valid(body["image"]["id"])
        assert body["image"]["name"] == "sample.png"
        assert body["image"]["size"] == len(sample_png)

    def test_upload_under_file_field(self, api_client, sample_jpeg) -> None:
        """E2E: The file field is accepted as well"""
        response = api_client.upload("sample.jpg", sample_jpeg, field="file")

        assert response.status_code == 201
        assert response.json()["image"]["name"] == "sample.jpg"

    def test_upload_with_special_characters(self, api_client, sample_png) -> None:
        """E2E: Names with spaces and punctuation are kept verbatim"""
        name = "photo 2024-01-26_final copy.png"
        response = api_client.upload(name, sample_png)

        assert response.status_code == 201
        assert response.json()["image"]["name"] == name

    def test_same_name_uploads_get_distinct_ids(self, api_client, sample_png) -> None:
        """E2E: Re-uploading a name creates a new object"""
        first = api_client.upload("dup.png", sample_png).json()["image"]["id"]
        second = api_client.upload("dup.png", sample_png).json()["image"]["id"]

        assert first != second


class TestUploadEndpointValidation:
    """E2E: Rejected uploads"""

    def test_upload_pdf_returns_400(self, api_client) -> None:
        """E2E: Disallowed extension returns 400"""
        response = api_client.upload("doc.pdf", b"%PDF-1.4", content_type="application/pdf")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] is True
        assert body["msg"] == "Invalid file type"

    def test_upload_unknown_field_returns_400(self, api_client, sample_png) -> None:
        """E2E: A file under an unexpected field name is not picked up"""
        response = api_client.upload("sample.png", sample_png, field="upload")

        assert response.status_code == 400
        assert response.json()["error"] is True
