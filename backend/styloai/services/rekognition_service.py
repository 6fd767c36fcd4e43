"""
Body and face analysis with AWS Rekognition (DetectLabels / DetectFaces).

The extract_* helpers are pure functions over Rekognition response fragments;
analyze_body_image / analyze_face_image do the AWS calls.
"""
import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config import settings
from ..core.exceptions import ConfigurationError, ExternalServiceError, ValidationError
from ..models import utcnow

logger = logging.getLogger(__name__)


def get_rekognition_client():
    if not settings.aws_configured:
        raise ConfigurationError("AWS Rekognition", ["AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"])
    return boto3.client(
        "rekognition",
        region_name=settings.AWS_REGION,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
    )


def _label_names(labels: List[dict]) -> List[str]:
    return [(l.get("Name") or "").lower() for l in labels]


def extract_body_type(labels: List[dict]) -> str:
    names = _label_names(labels)
    if any("athlete" in n or "sport" in n for n in names):
        return "athletic"
    has_person = any("person" in n for n in names)
    if has_person and any("tall" in n for n in names):
        return "tall"
    if has_person and any("short" in n for n in names):
        return "petite"
    return "average"


def extract_height_proportion(labels: List[dict], faces: List[dict]) -> str:
    names = _label_names(labels)
    if any("tall" in n for n in names):
        return "tall"
    if any("short" in n for n in names):
        return "short"

    box = faces[0].get("BoundingBox") if faces else None
    if box and box.get("Width"):
        aspect_ratio = box["Height"] / box["Width"]
        if aspect_ratio > 1.3:
            return "tall"
        if aspect_ratio < 0.9:
            return "short"
    return "average"


def extract_body_shape(labels: List[dict]) -> str:
    # Rekognition has no body-shape labels
    return "rectangle"


def skin_tone_from_brightness(brightness: Optional[float]) -> str:
    if brightness is None:
        brightness = 0.5
    if brightness > 0.8:
        return "fair"
    if brightness > 0.6:
        return "light"
    if brightness > 0.4:
        return "medium"
    if brightness > 0.2:
        return "tan"
    return "dark"


def extract_skin_tone(face: Optional[dict]) -> str:
    if face and face.get("Quality"):
        return skin_tone_from_brightness(face["Quality"].get("Brightness"))
    return "medium"


def extract_posture(labels: List[dict]) -> str:
    names = _label_names(labels)
    if any("standing" in n for n in names):
        return "Standing posture detected"
    if any("sitting" in n for n in names):
        return "Sitting posture detected"
    return "Neutral posture detected"


def extract_face_shape(face: dict) -> str:
    landmarks = face.get("Landmarks")
    box = face.get("BoundingBox")
    if not landmarks or not box or not box.get("Width"):
        return "oval"

    width, height = box["Width"], box["Height"]
    aspect_ratio = height / width
    if aspect_ratio > 1.4:
        return "oblong"
    if aspect_ratio < 0.9:
        return "round"
    if width > 0.5:
        return "square"

    jawline = [l["X"] for l in landmarks if l.get("Type") == "jawline" and "X" in l]
    if jawline:
        jaw_width = max(jawline) - min(jawline)
        if jaw_width < width * 0.7:
            return "heart"
        if jaw_width > width * 0.9:
            return "triangle"
    return "oval"


def _age_range(face: dict) -> Optional[str]:
    age = face.get("AgeRange")
    return f"{age['Low']}-{age['High']}" if age else None


def extract_face_features(face: dict) -> Dict[str, Any]:
    features: Dict[str, Any] = {"facial_features": "Standard facial features detected"}
    for key, name in (("EyesOpen", "eyes_open"), ("MouthOpen", "mouth_open"), ("Smile", "smile")):
        if face.get(key) and face[key].get("Value") is not None:
            features[name] = face[key]["Value"]
    if (face.get("Eyeglasses") or {}).get("Value"):
        features["eyeglasses"] = True
    if (face.get("Sunglasses") or {}).get("Value"):
        features["sunglasses"] = True
    if face.get("Gender"):
        features["gender"] = face["Gender"].get("Value")
    if face.get("AgeRange"):
        features["age_range"] = _age_range(face)
    return features


def generate_fit_recommendations(body_type: str, body_shape: str) -> List[str]:
    recommendations = []
    if body_type == "athletic":
        recommendations.append("Fitted tops that highlight your athletic build")
        recommendations.append("Structured pieces that complement your physique")
    elif body_type == "petite":
        recommendations.append("High-waisted bottoms to create length")
        recommendations.append("Fitted styles that don't overwhelm your frame")
    elif body_type == "tall":
        recommendations.append("Longer hemlines and proportions")
        recommendations.append("Layered pieces to add dimension")
    else:
        recommendations.append("Well-fitted clothing that follows your natural silhouette")

    if body_shape == "hourglass":
        recommendations.append("Belted styles to emphasize your waist")
        recommendations.append("Fitted tops that highlight your curves")
    elif body_shape == "rectangle":
        recommendations.append("A-line dresses to create curves")
        recommendations.append("Peplum tops to add definition")
    return recommendations


def generate_style_suggestions(body_type: str, body_shape: str, height_proportion: str) -> List[str]:
    suggestions = ["Experiment with different necklines to find what suits you"]
    if height_proportion == "short":
        suggestions.append("Vertical lines can create a lengthening effect")
        suggestions.append("Monochromatic outfits can elongate your silhouette")
    if body_shape in ("hourglass", "pear"):
        suggestions.append("Belted styles can help define your waist")
        suggestions.append("A-line skirts work well for your body type")
    suggestions.append("Consider your proportions when selecting patterns and textures")
    return suggestions


HAIRSTYLES_BY_FACE_SHAPE = {
    "round": ["Long layers to elongate your face", "Side-swept bangs to add angles"],
    "square": ["Soft waves to soften your features", "Layered cuts to add movement"],
    "heart": ["Chin-length bobs to balance your face", "Side-parted styles"],
    "oblong": ["Volume at the sides to add width", "Bangs to shorten the face"],
}


def generate_hairstyle_recommendations(face_shape: str) -> List[str]:
    return list(HAIRSTYLES_BY_FACE_SHAPE.get(face_shape, [
        "Most hairstyles work well with your face shape",
        "Consider layered cuts for dimension",
    ]))


def generate_accessory_recommendations(face_shape: str, features: Dict[str, Any]) -> List[str]:
    recommendations = []
    if face_shape in ("round", "square"):
        recommendations.append("Oval or round glasses to soften angles")
    elif face_shape == "oblong":
        recommendations.append("Wider frames to add width")
    recommendations.append("Drop earrings can elongate your face")
    recommendations.append("Consider your face shape when selecting accessories")
    if features.get("eyeglasses"):
        recommendations.append("Your current glasses complement your face shape")
    return recommendations


def generate_makeup_suggestions(face_shape: str, skin_tone: str) -> List[str]:
    suggestions = ["Choose foundation that matches your skin tone"]
    if face_shape == "round":
        suggestions.append("Contour along the jawline to add definition")
    if skin_tone in ("fair", "light"):
        suggestions.append("Soft, natural colors work well")
    elif skin_tone in ("tan", "dark"):
        suggestions.append("Rich, warm tones complement your skin")
    return suggestions


def build_body_analysis(labels: List[dict], faces: List[dict]) -> Dict[str, Any]:
    body_type = extract_body_type(labels)
    height_proportion = extract_height_proportion(labels, faces)
    body_shape = extract_body_shape(labels)
    return {
        "body_type": body_type,
        "height_proportion": height_proportion,
        "body_shape": body_shape,
        "skin_tone": extract_skin_tone(faces[0] if faces else None),
        "posture": extract_posture(labels),
        "fit_recommendations": generate_fit_recommendations(body_type, body_shape),
        "style_suggestions": generate_style_suggestions(body_type, body_shape, height_proportion),
        "confidence": "high",
        "analyzed_at": utcnow().isoformat(),
        "analysis_type": "body",
        "model": "aws-rekognition",
        "raw_labels": [l.get("Name") for l in labels],
        "face_count": len(faces),
    }


def build_face_analysis(face: dict) -> Dict[str, Any]:
    face_shape = extract_face_shape(face)
    skin_tone = extract_skin_tone(face)
    features = extract_face_features(face)
    emotions = face.get("Emotions")
    return {
        "face_shape": face_shape,
        "skin_tone": skin_tone,
        "features": features,
        "hairstyle_recommendations": generate_hairstyle_recommendations(face_shape),
        "accessory_recommendations": generate_accessory_recommendations(face_shape, features),
        "makeup_suggestions": generate_makeup_suggestions(face_shape, skin_tone),
        "confidence": "high",
        "analyzed_at": utcnow().isoformat(),
        "analysis_type": "face",
        "model": "aws-rekognition",
        "age_range": _age_range(face),
        "gender": (face.get("Gender") or {}).get("Value"),
        "emotions": ", ".join(e.get("Type", "") for e in emotions) if emotions else None,
    }


def analyze_body_image(image_bytes: bytes) -> Dict[str, Any]:
    client = get_rekognition_client()
    try:
        labels = client.detect_labels(
            Image={"Bytes": image_bytes}, MaxLabels=20, MinConfidence=70
        ).get("Labels", [])
        faces = client.detect_faces(Image={"Bytes": image_bytes}, Attributes=["ALL"]).get("FaceDetails", [])
    except (ClientError, BotoCoreError) as e:
        logger.error(f"AWS Rekognition error: {e}")
        raise ExternalServiceError("AWS Rekognition", f"Body analysis failed: {e}")
    return build_body_analysis(labels, faces)


def analyze_face_image(image_bytes: bytes) -> Dict[str, Any]:
    client = get_rekognition_client()
    try:
        faces = client.detect_faces(Image={"Bytes": image_bytes}, Attributes=["ALL"]).get("FaceDetails", [])
    except (ClientError, BotoCoreError) as e:
        logger.error(f"AWS Rekognition error: {e}")
        raise ExternalServiceError("AWS Rekognition", f"Face analysis failed: {e}")
    if not faces:
        raise ValidationError("No face detected in the image")
    return build_face_analysis(faces[0])
