"""Distance field generation pipeline.

This module coordinates the full workflow for one shape (normalize, color,
check coverage, frame, sample) and for a whole font, with optional parallel
sampling of raster row bands using ProcessPoolExecutor.

Key components:
- MsdfGenerator: Main orchestrator class
- sample_rows (from sampler): Top-level picklable worker function
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import Executor, ProcessPoolExecutor, as_completed
from pathlib import Path

import numpy as np
import structlog

from msdfkit.config import MsdfSettings, get_default_settings
from msdfkit.core.coloring import ColoringReport, EdgeColorer
from msdfkit.core.normalizer import NormalizationReport, ShapeNormalizer
from msdfkit.core.sampler import FieldSampler, sample_rows
from msdfkit.domain import DistanceField, FieldTransform, Shape
from msdfkit.exceptions import EmptyShapeError
from msdfkit.io import FieldWriter, FontReader
from msdfkit.utils import GenerationLogger, GenerationStats


class MsdfGenerator:
    """Orchestrates distance field generation.

    Manages the complete workflow:
    1. Normalize contour winding (fail fast on malformed shapes)
    2. Color edges
    3. Check that some channel is covered by edges
    4. Frame the shape in the raster
    5. Sample rows in process or in parallel worker processes

    Example:
        settings = MsdfSettings()
        generator = MsdfGenerator(settings)
        field = generator.generate(shape)
    """

    def __init__(
        self,
        settings: MsdfSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            settings: Settings for every stage (defaults if None)
            logger: Structured logger (module logger if None)
        """
        self.settings = settings or get_default_settings()
        self.logger = logger or structlog.get_logger(__name__)
        self.generation_logger = GenerationLogger(self.logger)
        self.normalizer = ShapeNormalizer(self.settings.geometry)
        self.colorer = EdgeColorer(self.settings.coloring)
        self.sampler = FieldSampler(
            channels=self.settings.field.channels,
            sub_samples=self.settings.field.sub_samples,
        )

    def prepare(self, shape: Shape) -> tuple[NormalizationReport, ColoringReport]:
        """Normalize and color a shape in place.

        Raises:
            DegenerateContourError: If a contour is unusable
            AmbiguousWindingError: If a contour's winding cannot be inferred
        """
        name = shape.name or "shape"
        normalization = self.normalizer.normalize(shape)
        self.generation_logger.log_normalization(
            name,
            total_contours=len(shape.contours),
            reversed_count=len(normalization.reversed_contours),
            hole_count=normalization.hole_count,
        )

        coloring = self.colorer.color_shape(shape)
        self.generation_logger.log_coloring(
            name,
            sharp_corners=coloring.total_sharp_corners,
            fallbacks=len(coloring.fallback_contours),
        )
        return normalization, coloring

    def check_coverage(self, shape: Shape) -> list[int]:
        """Verify that edges contribute to the field channels.

        Returns:
            Channels that will only hold the sentinel value

        Raises:
            EmptyShapeError: If no channel has any contributing edge
        """
        channels = self.settings.field.channels
        uncovered = shape.uncovered_channels(channels)
        if len(uncovered) == channels:
            raise EmptyShapeError(uncovered)
        if uncovered:
            self.logger.warning(
                "Channels without edges",
                name=shape.name,
                channels=uncovered,
            )
        return uncovered

    def frame(self, shape: Shape) -> tuple[FieldTransform, float]:
        """Work out the pixel mapping and the distance range in shape units.

        Unset scale fits the shape into the raster with the distance range
        kept free as margin; unset translation centers it.

        Returns:
            Tuple of (transform, distance range in shape units)
        """
        config = self.settings.field
        bounds = shape.bounds()

        if config.scale is None:
            transform = FieldTransform.fit(bounds, config.width, config.height, config.distance_range)
        else:
            center = bounds.center if not bounds.is_empty() else None
            transform = FieldTransform(
                scale=config.scale,
                translate_x=config.width / (2 * config.scale) - center.x if center else 0.0,
                translate_y=config.height / (2 * config.scale) - center.y if center else 0.0,
            )

        if config.translate is not None:
            transform = FieldTransform(transform.scale, config.translate[0], config.translate[1])

        return transform, config.distance_range / transform.scale

    def generate(self, shape: Shape, executor: Executor | None = None) -> DistanceField:
        """Generate the distance field of a shape.

        The shape is normalized and colored in place first. Every geometry
        problem surfaces before sampling starts, so no partial field is
        ever produced.

        Args:
            shape: Shape to render
            executor: Worker pool to sample row bands on. Without one, a
                pool is opened for this call unless max_workers is 1.

        Returns:
            DistanceField owned by the caller

        Raises:
            DegenerateContourError: If a contour is unusable
            AmbiguousWindingError: If a contour's winding cannot be inferred
            EmptyShapeError: If no edge contributes to any channel
        """
        self.prepare(shape)
        self.check_coverage(shape)
        transform, distance_range = self.frame(shape)

        config = self.settings.field
        if self.settings.processing.max_workers == 1:
            return self.sampler.sample(shape, config.width, config.height, transform, distance_range)

        if executor is None:
            with ProcessPoolExecutor(max_workers=self.settings.processing.max_workers) as pool:
                data = self._sample_parallel(shape, transform, pool)
        else:
            data = self._sample_parallel(shape, transform, executor)
        return DistanceField(data=data, transform=transform, distance_range=distance_range)

    def _sample_parallel(self, shape: Shape, transform: FieldTransform, executor: Executor) -> np.ndarray:
        """Sample row bands in worker processes and reassemble them.

        Args:
            shape: Normalized and colored shape
            transform: Pixel to shape mapping
            executor: Pool the bands are submitted to

        Returns:
            Array of shape (height, width, channels)
        """
        config = self.settings.field
        max_workers = self.settings.processing.max_workers
        band = self.settings.processing.rows_per_task

        shape_dict = shape.to_dict()
        transform_dict = transform.to_dict()
        data = np.empty((config.height, config.width, config.channels), dtype=np.float64)

        self.logger.debug(
            "Starting parallel sampling",
            name=shape.name,
            rows=config.height,
            rows_per_task=band,
            max_workers=max_workers,
        )

        futures = [
            executor.submit(
                sample_rows,
                shape_dict,
                config.width,
                transform_dict,
                start,
                min(start + band, config.height),
                config.channels,
                config.sub_samples,
            )
            for start in range(0, config.height, band)
        ]
        for future in as_completed(futures):
            start, rows = future.result()
            data[start : start + rows.shape[0]] = rows

        return data

    def process_font(
        self,
        font_path: Path,
        output_dir: Path | None = None,
        chars: str | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> GenerationStats:
        """Generate and save distance fields for glyphs of a font.

        Args:
            font_path: Path to input font file (TTF or OTF)
            output_dir: Directory for the .npz fields (font directory if None)
            chars: Characters to render (every glyph if None)
            progress_callback: Optional callback(completed, total, glyph_name, success)

        Returns:
            GenerationStats with counts, timing, and error details

        Raises:
            FontLoadError: If the font cannot be read
        """
        self.generation_logger = GenerationLogger(self.logger)
        stats = self.generation_logger.stats
        stats.start_time = time.time()

        self.logger.info(
            "Starting font processing",
            input=str(font_path),
            output_dir=str(output_dir) if output_dir else None,
            max_workers=self.settings.processing.max_workers,
        )

        reader = FontReader(font_path)
        reader.load()

        # One pool serves every glyph of the run
        max_workers = self.settings.processing.max_workers
        executor = ProcessPoolExecutor(max_workers=max_workers) if max_workers != 1 else None

        try:
            self.logger.info(
                "Font loaded",
                format=reader.format,
                upm=reader.units_per_em,
                glyph_count=reader.glyph_count,
            )

            names: list[str] = []
            if chars is None:
                names = reader.glyph_names
            else:
                for char in chars:
                    name = reader.glyph_name_for_char(char)
                    if name is None:
                        self.generation_logger.log_field_skipped(char, "character not in font")
                    elif name not in names:
                        names.append(name)

            total = len(names)
            for completed, name in enumerate(names, start=1):
                success = self._process_glyph(reader, font_path, name, output_dir, executor)
                if progress_callback is not None:
                    progress_callback(completed, total, name, success)

        finally:
            if executor is not None:
                executor.shutdown(wait=True, cancel_futures=True)
            reader.close()

        stats.end_time = time.time()
        self.logger.info(
            "Processing complete",
            generated=stats.generated_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return stats

    def _process_glyph(
        self,
        reader: FontReader,
        font_path: Path,
        name: str,
        output_dir: Path | None,
        executor: Executor | None = None,
    ) -> bool:
        """Render and save one glyph; errors are logged, not raised.

        Outline drawing failures inside fontTools count as glyph errors
        too, so one broken glyph never stops the font.
        """
        self.generation_logger.log_field_start(name)
        start_time = time.perf_counter()

        try:
            shape = reader.get_shape(name)
            if shape.is_empty():
                self.generation_logger.log_field_skipped(name, "empty glyph")
                return True

            field = self.generate(shape, executor=executor)
            FieldWriter.save(field, FieldWriter.get_output_path(font_path, name, output_dir))
        except Exception as e:
            self.generation_logger.log_field_error(name, e, traceback.format_exc())
            return False

        duration_ms = (time.perf_counter() - start_time) * 1000
        self.generation_logger.log_field_complete(name, field.width, field.height, duration_ms)
        return True
