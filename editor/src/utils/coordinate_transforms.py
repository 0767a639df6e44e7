"""Coordinate transformation utilities for the canvas.

Provides conversion between the two coordinate systems:
- Host pixels (Y-down, origin at the host widget's top-left)
- Canvas percent (0-100 on each axis, origin at the canvas top-left)

All functions are pure in the canvas rectangle they are given; callers
must pass the rectangle measured for the current event.
"""

from models.transform import Vec2, Rect, CanvasRect


def pointer_to_percent(px, py, rect: CanvasRect) -> Vec2:
	"""Convert a pointer pixel position to canvas percent.

	Args:
		px: Pointer X in host pixels
		py: Pointer Y in host pixels
		rect: Canvas rectangle measured for this event

	Returns:
		Vec2 in percent space (may fall outside 0-100 when the pointer
		is outside the canvas)
	"""
	return Vec2(
		(px - rect.left) / rect.width * 100.0,
		(py - rect.top) / rect.height * 100.0
	)


def percent_to_pixels(pct: Vec2, rect: CanvasRect) -> Vec2:
	"""Convert a canvas percent position back to host pixels (inverse of pointer_to_percent)."""
	return Vec2(
		rect.left + pct.x / 100.0 * rect.width,
		rect.top + pct.y / 100.0 * rect.height
	)


def geometry_to_pixels(geometry: Rect, rect: CanvasRect):
	"""Convert item geometry (percent) to a host pixel box.

	Returns:
		(left, top, width, height) in host pixels
	"""
	top_left = percent_to_pixels(Vec2(geometry.x, geometry.y), rect)
	return (
		top_left.x,
		top_left.y,
		geometry.w / 100.0 * rect.width,
		geometry.h / 100.0 * rect.height
	)


def fit_canvas_rect(host_width, host_height, aspect_width, aspect_height, margin=0):
	"""Largest rectangle of the given aspect centered inside the host area.

	Args:
		host_width, host_height: Available host area in pixels
		aspect_width, aspect_height: Output format size (only the ratio matters)
		margin: Pixels kept free on every side

	Returns:
		CanvasRect (unmeasured, i.e. zero-sized, when the host has no area)
	"""
	avail_w = max(0, host_width - 2 * margin)
	avail_h = max(0, host_height - 2 * margin)
	if avail_w <= 0 or avail_h <= 0:
		return CanvasRect(0, 0, 0, 0)

	ratio = aspect_width / aspect_height
	width = avail_w
	height = width / ratio
	if height > avail_h:
		height = avail_h
		width = height * ratio

	left = (host_width - width) / 2
	top = (host_height - height) / 2
	return CanvasRect(left, top, width, height)
