"""Field writer for saving distance fields.

Fields are stored as compressed NumPy archives holding the raw float raster
and the mapping needed to sample it later. No image encoding is done.
"""

import zipfile
from pathlib import Path

import numpy as np

from msdfkit.domain import DistanceField, FieldTransform
from msdfkit.exceptions import FieldSaveError


class FieldWriter:
    """Saves and loads distance fields as ``.npz`` archives.

    Archive members:
    - data: float64 array (height, width, channels), row 0 at the bottom
    - scale: pixels per shape unit
    - translate: shape-space translation (x, y)
    - distance_range: representable range in shape units

    Example:
        path = FieldWriter.get_output_path(Path("font.ttf"), "A")
        FieldWriter.save(field, path)
    """

    @staticmethod
    def get_output_path(font_path: Path, glyph_name: str, output_dir: Path | None = None) -> Path:
        """Generate the output path for a glyph field.

        Args:
            font_path: Path of the source font
            glyph_name: Name of the rendered glyph
            output_dir: Target directory (font directory if None)

        Returns:
            Path like ``fonts/Roboto-A-msdf.npz``
        """
        font_path = Path(font_path)
        directory = Path(output_dir) if output_dir is not None else font_path.parent
        safe_name = glyph_name.replace("/", "_").replace("\\", "_")
        return directory / f"{font_path.stem}-{safe_name}-msdf.npz"

    @staticmethod
    def save(field: DistanceField, path: Path) -> Path:
        """Write a field to disk, creating parent directories.

        Raises:
            FieldSaveError: If the file cannot be written
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("wb") as handle:
                np.savez_compressed(
                    handle,
                    data=field.data,
                    scale=np.float64(field.transform.scale),
                    translate=np.array(
                        [field.transform.translate_x, field.transform.translate_y], dtype=np.float64
                    ),
                    distance_range=np.float64(field.distance_range),
                )
        except OSError as e:
            raise FieldSaveError(str(path), str(e)) from e
        return path

    @staticmethod
    def load(path: Path) -> DistanceField:
        """Read a field written by ``save``.

        Raises:
            FieldSaveError: If the file is missing or not a field archive
        """
        path = Path(path)
        try:
            with np.load(path) as archive:
                data = archive["data"]
                scale = float(archive["scale"])
                translate_x, translate_y = (float(v) for v in archive["translate"])
                distance_range = float(archive["distance_range"])
        except (OSError, KeyError, ValueError, zipfile.BadZipFile) as e:
            raise FieldSaveError(str(path), f"cannot read field: {e}") from e

        return DistanceField(
            data=data,
            transform=FieldTransform(scale, translate_x, translate_y),
            distance_range=distance_range,
        )
