"""
Headless curve editing session.

A CurveEditor owns exactly one B-spline curve together with the display
geometry derived from it (sampled curve, control polygon, break points).
The interaction layer forwards clicks and panel changes; the editor
mutates the curve and immediately regenerates the display geometry.

Click handling:
- remove=True: delete the control point under the cursor, if any
- a point is being dragged: move it to the cursor
- a control point is under the cursor: start dragging it
- otherwise: insert a new point and start dragging it

"Under the cursor" means within config.pick_radius / zoom_factor.
"""

import logging
import numpy as np
from typing import Optional

from ..geometry.curve import BSplineCurve
from ..geometry.point import as_point
from ..io.config import SamplingConfig
from ..postprocess.sampling import sample_break_points, sample_curve

logger = logging.getLogger(__name__)


class CurveEditor:
    """
    Editing session for a single B-spline curve.

    Attributes:
        curve: The curve being edited (exclusively owned)
        config: Sampling and picking parameters
        moving_point: Index of the control point being dragged, or None
        curve_points: Sampled curve, shape (n_samples, d)
        break_points: Curve points at the breakpoints
    """

    def __init__(self, curve: Optional[BSplineCurve] = None,
                 config: Optional[SamplingConfig] = None):
        self.curve = curve if curve is not None else BSplineCurve.empty()
        self.config = config or SamplingConfig()
        self.moving_point: Optional[int] = None

        self.curve_points = np.zeros((0, 0))
        self.break_points = np.zeros((0, 0))
        self.refresh()

    @property
    def control_points(self) -> np.ndarray:
        """Control polygon, drawn as points and as a line strip."""
        return self.curve.control_points

    def refresh(self) -> None:
        """Regenerate the display geometry from the curve."""
        self.curve_points = sample_curve(self.curve, self.config.step_size)
        self.break_points = sample_break_points(self.curve)

    def nearest_control_point(self, pos: np.ndarray):
        """
        Closest control point to pos.

        Returns:
            (index, distance), or (None, inf) for an empty curve
        """
        if self.curve.is_empty:
            return None, np.inf
        dists = np.linalg.norm(self.curve.control_points - pos, axis=1)
        index = int(np.argmin(dists))
        return index, float(dists[index])

    def handle_click(self, pos, remove: bool = False, zoom_factor: float = 1.0) -> None:
        """
        Apply a click (or drag frame) at pos.

        Parameters:
            pos: Cursor position in curve coordinates
            remove: Remove the control point under the cursor
            zoom_factor: Current view zoom; larger zoom shrinks the pick radius
        """
        pos = as_point(pos)
        nearest, dist = self.nearest_control_point(pos)
        pick_radius = self.config.pick_radius / zoom_factor

        if remove:
            self.moving_point = None
            if nearest is not None and dist < pick_radius:
                self.curve.remove_point(nearest)
                logger.info("Removed control point %d", nearest)
        elif self.moving_point is not None:
            self.curve.move_point(self.moving_point, pos)
        elif nearest is not None and dist < pick_radius:
            self.moving_point = nearest
            self.curve.move_point(nearest, pos)
        else:
            self.moving_point = self.curve.insert_point(pos)
            logger.info("Inserted control point %d", self.moving_point)

        self.refresh()

    def release_point(self) -> None:
        """Release any held point that was being dragged."""
        self.moving_point = None

    def set_degree(self, degree: int) -> None:
        """Change the curve degree; ignored while the curve can only be degree 0."""
        if self.curve.max_possible_degree == 0:
            return
        self.curve.set_degree(degree)
        logger.info("Curve degree set to %d", degree)
        self.refresh()

    def set_clamped(self, clamped: bool) -> None:
        """Clamp or open both ends of the curve."""
        self.curve.set_clamped(clamped)
        self.refresh()
