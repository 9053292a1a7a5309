"""Line configuration loader."""

from typing import Any

from subway_lines.adapters.config.app_config import AppConfig
from subway_lines.domain.models.line_configuration import (
    LineConfiguration,
    SegmentConfiguration,
)


class LineConfigurationLoader:
    """Loads line configurations from app config."""

    @staticmethod
    def load_segment_config_from_data(segment_data: Any, line_name: str) -> SegmentConfiguration:
        """Load a single segment configuration from data dict."""
        if not isinstance(segment_data, dict):
            raise ValueError(f"Segments of line {line_name!r} must be tables")

        missing = [key for key in ("source", "target", "distance") if key not in segment_data]
        if missing:
            raise ValueError(
                f"Segment of line {line_name!r} is missing field(s): {', '.join(missing)}"
            )

        distance = segment_data["distance"]
        if isinstance(distance, bool) or not isinstance(distance, int):
            raise ValueError(
                f"Segment distance of line {line_name!r} must be an integer, got {distance!r}"
            )

        return SegmentConfiguration(
            source=str(segment_data["source"]),
            target=str(segment_data["target"]),
            distance=distance,
        )

    @staticmethod
    def load(config: AppConfig) -> list[LineConfiguration]:
        """Load line configurations from app config."""
        line_configs: list[LineConfiguration] = []

        for line_data in config.get_lines_config():
            name = str(line_data["name"])
            color = str(line_data.get("color", ""))
            segments_data = line_data.get("segments", [])
            if not isinstance(segments_data, list):
                raise ValueError(f"'segments' of line {name!r} must be a list")

            segments = [
                LineConfigurationLoader.load_segment_config_from_data(segment_data, name)
                for segment_data in segments_data
            ]
            line_configs.append(LineConfiguration(name=name, color=color, segments=segments))

        return line_configs
