"""
Tests for body/face analysis built from Rekognition responses.
"""
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from styloai.core.exceptions import ConfigurationError, ExternalServiceError, ValidationError
from styloai.services import rekognition_service
from styloai.services.rekognition_service import (
    analyze_body_image,
    analyze_face_image,
    build_body_analysis,
    extract_body_type,
    extract_face_features,
    extract_face_shape,
    extract_height_proportion,
    extract_skin_tone,
    get_rekognition_client,
    skin_tone_from_brightness,
)

FACE = {
    "BoundingBox": {"Width": 0.3, "Height": 0.36},
    "Landmarks": [{"Type": "jawline", "X": 0.40}, {"Type": "jawline", "X": 0.58}, {"Type": "nose", "X": 0.5}],
    "Quality": {"Brightness": 0.7},
    "EyesOpen": {"Value": True},
    "Smile": {"Value": False},
    "Eyeglasses": {"Value": True},
    "Gender": {"Value": "Female"},
    "AgeRange": {"Low": 24, "High": 30},
    "Emotions": [{"Type": "CALM"}, {"Type": "HAPPY"}],
}


def labels(*names):
    return [{"Name": n} for n in names]


class TestBody:
    @pytest.mark.parametrize("names,expected", [
        (("Person", "Sport"), "athletic"),
        (("Person", "Tall"), "tall"),
        (("Person", "Short"), "petite"),
        (("Tall",), "average"),
        ((), "average"),
    ])
    def test_body_type(self, names, expected):
        assert extract_body_type(labels(*names)) == expected

    def test_height_from_labels_then_face_box(self):
        assert extract_height_proportion(labels("Tall"), []) == "tall"
        assert extract_height_proportion([], [{"BoundingBox": {"Width": 0.2, "Height": 0.3}}]) == "tall"
        assert extract_height_proportion([], [{"BoundingBox": {"Width": 0.4, "Height": 0.3}}]) == "short"
        assert extract_height_proportion([], []) == "average"

    @pytest.mark.parametrize("brightness,expected", [
        (0.9, "fair"), (0.7, "light"), (0.5, "medium"), (0.3, "tan"), (0.1, "dark"), (None, "medium"),
    ])
    def test_skin_tone(self, brightness, expected):
        assert skin_tone_from_brightness(brightness) == expected

    def test_skin_tone_without_face(self):
        assert extract_skin_tone(None) == "medium"

    def test_build_body_analysis(self):
        analysis = build_body_analysis(labels("Person", "Standing", "Athlete"), [FACE])
        assert analysis["body_type"] == "athletic"
        assert analysis["skin_tone"] == "light"
        assert analysis["posture"] == "Standing posture detected"
        assert analysis["body_shape"] == "rectangle"
        assert analysis["face_count"] == 1
        assert analysis["raw_labels"] == ["Person", "Standing", "Athlete"]
        assert "A-line dresses to create curves" in analysis["fit_recommendations"]


class TestFace:
    def test_face_shape_rules(self):
        assert extract_face_shape({"Landmarks": [{}], "BoundingBox": {"Width": 0.2, "Height": 0.3}}) == "oblong"
        assert extract_face_shape({"Landmarks": [{}], "BoundingBox": {"Width": 0.4, "Height": 0.3}}) == "round"
        assert extract_face_shape({"Landmarks": [{}], "BoundingBox": {"Width": 0.6, "Height": 0.6}}) == "square"
        assert extract_face_shape(FACE) == "heart"  # jaw 0.18 < 0.7 * 0.3
        assert extract_face_shape({"BoundingBox": {"Width": 0.3, "Height": 0.3}}) == "oval"

    def test_features(self):
        features = extract_face_features(FACE)
        assert features["eyes_open"] is True
        assert features["smile"] is False
        assert features["eyeglasses"] is True
        assert "sunglasses" not in features
        assert features["age_range"] == "24-30"


class TestAwsCalls:
    def test_not_configured(self):
        with pytest.raises(ConfigurationError):
            get_rekognition_client()

    def test_face_analysis(self):
        client = MagicMock()
        client.detect_faces.return_value = {"FaceDetails": [FACE]}
        with patch.object(rekognition_service, "get_rekognition_client", return_value=client):
            analysis = analyze_face_image(b"img")

        assert analysis["face_shape"] == "heart"
        assert analysis["emotions"] == "CALM, HAPPY"
        assert analysis["gender"] == "Female"
        assert analysis["hairstyle_recommendations"] == ["Chin-length bobs to balance your face", "Side-parted styles"]
        assert "Your current glasses complement your face shape" in analysis["accessory_recommendations"]
        client.detect_faces.assert_called_once_with(Image={"Bytes": b"img"}, Attributes=["ALL"])

    def test_no_face(self):
        client = MagicMock()
        client.detect_faces.return_value = {"FaceDetails": []}
        with patch.object(rekognition_service, "get_rekognition_client", return_value=client):
            with pytest.raises(ValidationError) as exc:
                analyze_face_image(b"img")
        assert exc.value.message == "No face detected in the image"

    def test_body_aws_error(self):
        client = MagicMock()
        client.detect_labels.side_effect = ClientError(
            {"Error": {"Code": "InvalidImageFormatException", "Message": "bad image"}}, "DetectLabels"
        )
        with patch.object(rekognition_service, "get_rekognition_client", return_value=client):
            with pytest.raises(ExternalServiceError):
                analyze_body_image(b"img")
