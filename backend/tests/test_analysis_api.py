"""
Tests for body/face photo uploads (Rekognition mocked).
"""
from unittest.mock import patch

import pytest

from styloai.config import settings
from styloai.core.exceptions import ExternalServiceError, ValidationError

JPEG = ("me.jpg", b"\xff\xd8\xff\xe0" + b"\x00" * 32, "image/jpeg")


@pytest.fixture
def aws(monkeypatch):
    monkeypatch.setattr(settings, "AWS_ACCESS_KEY_ID", "key")
    monkeypatch.setattr(settings, "AWS_SECRET_ACCESS_KEY", "secret")


class TestBodyAnalysis:
    def test_placeholder_without_aws(self, client, auth_headers):
        response = client.post("/api/analysis/body", headers=auth_headers, files={"image": JPEG})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Body image uploaded and analyzed"
        analysis = body["body_analysis"]
        assert "/uploads/" in analysis["image_url"]
        assert analysis["analysis_data"]["analysis"] == "Body image uploaded successfully. AI analysis pending."

        profile = client.get("/api/profile", headers=auth_headers).json()
        assert profile["body_analysis"]["image_url"] == analysis["image_url"]

    def test_rekognition_result_is_stored(self, client, auth_headers, aws):
        result = {"body_type": "athletic", "skin_tone": "light"}
        with patch("styloai.services.analysis_service.analyze_body_image", return_value=result):
            response = client.post("/api/analysis/body", headers=auth_headers, files={"image": JPEG})
        assert response.json()["body_analysis"]["analysis_data"] == result

    def test_rekognition_failure_keeps_upload(self, client, auth_headers, aws):
        with patch("styloai.services.analysis_service.analyze_body_image",
                   side_effect=ExternalServiceError("AWS Rekognition", "boom")):
            response = client.post("/api/analysis/body", headers=auth_headers, files={"image": JPEG})
        assert response.status_code == 200
        assert "AI analysis pending" in response.json()["body_analysis"]["analysis_data"]["analysis"]

    def test_missing_image(self, client, auth_headers):
        response = client.post("/api/analysis/body", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "No image file provided"


class TestFaceAnalysis:
    def test_face_result(self, client, auth_headers, aws):
        result = {"face_shape": "oval"}
        with patch("styloai.services.analysis_service.analyze_face_image", return_value=result):
            response = client.post("/api/analysis/face", headers=auth_headers, files={"image": JPEG})
        assert response.json()["message"] == "Face image uploaded and analyzed"
        assert response.json()["face_analysis"]["analysis_data"] == result

    def test_no_face_detected(self, client, auth_headers, aws):
        with patch("styloai.services.analysis_service.analyze_face_image",
                   side_effect=ValidationError("No face detected in the image")):
            response = client.post("/api/analysis/face", headers=auth_headers, files={"image": JPEG})
        assert response.status_code == 400
        assert response.json()["message"] == "No face detected in the image"
