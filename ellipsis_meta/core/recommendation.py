from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ellipsis_meta.core.models import PhotoMetadata

DEFAULT_FIELDS: Dict[str, str] = {
    "exif_data": "{}",
    "analysis_depth": "standard",
    "color_analysis": "true",
    "emotion_analysis": "true",
    "max_songs": "8",
    "mood_intensity": "0.5",
    "visual_theme": "auto",
    "cultural_context": "korean",
}

ANALYSIS_DEPTHS = ("quick", "standard", "deep")
VISUAL_THEMES = ("auto", "warm", "cool", "vibrant", "muted")


def _flag(value: bool) -> str:
    return "true" if value else "false"


class RecommendationRequestBuilder:
    """Collects the text parts of a music recommendation upload.

    The image file parts and the HTTP call itself belong to the caller. ``build`` only
    returns the form fields, with ``exif_data`` carrying the serialized extraction record.
    """

    def __init__(self, hashtags: str) -> None:
        self.hashtags = hashtags
        self.labels: List[str] = []
        self.parameters: Dict[str, str] = {}

    @classmethod
    def from_photo(
        cls, photo: PhotoMetadata, hashtags: str, labels: Optional[Iterable[str]] = None
    ) -> "RecommendationRequestBuilder":
        builder = cls(hashtags).set_exif_data(photo.exif_json).set_location(photo.latitude, photo.longitude)
        builder.set_datetime(photo.photo_date if photo.photo_date.strip() else None)
        if labels:
            builder.set_labels(labels)
        return builder

    def set_labels(self, labels: Iterable[str]) -> "RecommendationRequestBuilder":
        for label in labels:
            label = label.strip()
            if label and label not in self.labels:
                self.labels.append(label)
        return self

    def set_location(self, latitude: Optional[float], longitude: Optional[float]) -> "RecommendationRequestBuilder":
        if latitude is not None:
            self.parameters["latitude"] = str(latitude)
        if longitude is not None:
            self.parameters["longitude"] = str(longitude)
        return self

    def set_datetime(self, value: Optional[str]) -> "RecommendationRequestBuilder":
        if value is not None:
            self.parameters["datetime"] = value
        return self

    def set_exif_data(self, exif_json: str) -> "RecommendationRequestBuilder":
        self.parameters["exif_data"] = exif_json
        return self

    def set_analysis_depth(self, depth: str) -> "RecommendationRequestBuilder":
        if depth not in ANALYSIS_DEPTHS:
            raise ValueError(f"Unknown analysis depth: {depth}")
        self.parameters["analysis_depth"] = depth
        return self

    def set_max_songs(self, count: int) -> "RecommendationRequestBuilder":
        if count < 1:
            raise ValueError("max_songs must be at least 1")
        self.parameters["max_songs"] = str(count)
        return self

    def set_mood_intensity(self, intensity: float) -> "RecommendationRequestBuilder":
        if not 0.0 <= intensity <= 1.0:
            raise ValueError("mood_intensity must be within 0.0 and 1.0")
        self.parameters["mood_intensity"] = str(intensity)
        return self

    def set_visual_theme(self, theme: str) -> "RecommendationRequestBuilder":
        if theme not in VISUAL_THEMES:
            raise ValueError(f"Unknown visual theme: {theme}")
        self.parameters["visual_theme"] = theme
        return self

    def set_cultural_context(self, context: str) -> "RecommendationRequestBuilder":
        self.parameters["cultural_context"] = context
        return self

    def enable_color_analysis(self, enable: bool = True) -> "RecommendationRequestBuilder":
        self.parameters["color_analysis"] = _flag(enable)
        return self

    def enable_emotion_analysis(self, enable: bool = True) -> "RecommendationRequestBuilder":
        self.parameters["emotion_analysis"] = _flag(enable)
        return self

    def build(self) -> Dict[str, str]:
        fields = dict(DEFAULT_FIELDS)
        fields.update(self.parameters)
        fields["hashtags"] = self.hashtags
        if self.labels:
            fields["labels"] = ",".join(self.labels)
        return fields
