from numbers import Real

from core.exceptions import ValidationError
from core.models import PLAY_CATEGORIES, USER_ROLES
from core.utils import normalize_tags

# JSON key -> model attribute for frame content
FRAME_FIELDS = {
    "duration": "duration",
    "positions": "positions",
    "lines": "lines",
    "annotations": "annotations",
    "ballPosition": "ball_position",
}


class DataValidator:
    @staticmethod
    def require_payload(data):
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @staticmethod
    def require_name(value, label="Name", max_length=200):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{label} is required")
        value = value.strip()
        if len(value) > max_length:
            raise ValidationError(f"{label} must be at most {max_length} characters")
        return value

    @staticmethod
    def optional_text(value, label="Description"):
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValidationError(f"{label} must be a string")
        return value

    @staticmethod
    def optional_int(value, label):
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValidationError(f"{label} must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{label} must be an integer")

    @staticmethod
    def validate_category(value):
        if value not in PLAY_CATEGORIES:
            raise ValidationError(
                f"Invalid category: {value}. Use one of {', '.join(PLAY_CATEGORIES)}"
            )
        return value

    @staticmethod
    def validate_role(value):
        if value not in USER_ROLES:
            raise ValidationError(f"Invalid role: {value}")
        return value

    @staticmethod
    def validate_tags(value, max_tags=30):
        if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
            raise ValidationError("Tags must be a list of strings")
        tags = normalize_tags(value)
        if len(tags) > max_tags:
            raise ValidationError(f"A play can have at most {max_tags} tags")
        return tags

    @staticmethod
    def validate_bool(value, label):
        if not isinstance(value, bool):
            raise ValidationError(f"{label} must be true or false")
        return value

    @staticmethod
    def validate_ball_position(value):
        if value is None:
            return None
        if not isinstance(value, dict):
            raise ValidationError("ballPosition must be an object with x and y")
        for axis in ("x", "y"):
            coord = value.get(axis)
            if isinstance(coord, bool) or not isinstance(coord, Real):
                raise ValidationError(f"ballPosition.{axis} must be a number")
        return value

    @classmethod
    def validate_frame_content(cls, data):
        """
        Validate the content keys present in a frame payload.
        Returns model attribute names mapped to clean values; absent keys
        are left out so callers can apply partial updates.
        """
        cleaned = {}
        for key, attr in FRAME_FIELDS.items():
            if key not in data:
                continue
            value = data[key]
            if key == "duration":
                if isinstance(value, bool) or not isinstance(value, Real) or value <= 0:
                    raise ValidationError("duration must be a positive number")
                value = float(value)
            elif key == "ballPosition":
                value = cls.validate_ball_position(value)
            elif not isinstance(value, list):
                raise ValidationError(f"{key} must be a list")
            cleaned[attr] = value
        return cleaned

    @classmethod
    def validate_frame_entry(cls, data, require_id=False):
        """Frame dict from a bulk payload: content plus id and frameNumber"""
        if not isinstance(data, dict):
            raise ValidationError("Each frame must be an object")
        entry = cls.validate_frame_content(data)
        entry["id"] = cls.optional_int(data.get("id"), "Frame id")
        if require_id and entry["id"] is None:
            raise ValidationError("Each frame must carry an id")
        entry["frame_number"] = cls.optional_int(data.get("frameNumber"), "frameNumber")
        if entry["frame_number"] is not None and entry["frame_number"] < 0:
            raise ValidationError("frameNumber must not be negative")
        return entry

    @classmethod
    def validate_frame_list(cls, value, require_id=False):
        if not isinstance(value, list):
            raise ValidationError("frames must be a list")
        return [cls.validate_frame_entry(item, require_id=require_id) for item in value]

    @classmethod
    def validate_version(cls, data):
        version = cls.optional_int(data.get("version"), "version")
        if version is not None and version < 1:
            raise ValidationError("version must be a positive integer")
        return version

    @staticmethod
    def validate_registration(data):
        required = ["firstName", "lastName", "email", "password", "role"]
        for field in required:
            value = data.get(field)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"Missing field: {field}")
        if "@" not in data["email"]:
            raise ValidationError("Invalid email address")
        if len(data["password"]) < 8:
            raise ValidationError("Password must be at least 8 characters")
        return data
