"""Coordinate transformation utilities for mask editing.

Provides conversion between the coordinate systems the engine touches:
- Client/screen pixels (pointer events, CSS pixels, Y-down)
- Viewport device pixels (client pixels scaled by device pixel ratio)
- Camera frame (device pixels with pan/zoom removed)
- Image space (pixels of the source photo)

Both directions apply the same steps in mirrored order, so a round trip is
exact up to floating point error.
"""
from models.transform import Vec2, Camera
from constants import FIT_PADDING


def _check_scale(name, value):
	if value == 0:
		raise ValueError(f"{name} must be non-zero")


def screen_to_image(client_x, client_y, viewport, camera, dpr, img_fit):
	"""Convert client pixel coordinates to image-space pixels.

	Args:
		client_x: Pointer X in client pixels
		client_y: Pointer Y in client pixels
		viewport: Viewport with left/top origin of the drawing surface
		camera: Camera (scale, pan_x, pan_y) in device pixels
		dpr: Device pixel ratio
		img_fit: ImageFit (origin_x, origin_y, scale) inside the camera frame

	Returns:
		Vec2 in image space

	Raises:
		ValueError: If any scale factor (dpr, camera, image) is zero
	"""
	_check_scale('dpr', dpr)
	_check_scale('camera.scale', camera.scale)
	_check_scale('img_fit.scale', img_fit.scale)

	# Remove viewport origin, then move to device pixels
	device_x = (client_x - viewport.left) * dpr
	device_y = (client_y - viewport.top) * dpr

	# Undo camera pan and zoom
	frame_x = (device_x - camera.pan_x) / camera.scale
	frame_y = (device_y - camera.pan_y) / camera.scale

	# Undo image placement
	image_x = (frame_x - img_fit.origin_x) / img_fit.scale
	image_y = (frame_y - img_fit.origin_y) / img_fit.scale

	return Vec2(image_x, image_y)


def image_to_screen(image_x, image_y, viewport, camera, dpr, img_fit):
	"""Convert image-space pixels to client pixel coordinates.

	Exact inverse of screen_to_image.

	Args:
		image_x: X in image pixels
		image_y: Y in image pixels
		viewport: Viewport with left/top origin of the drawing surface
		camera: Camera (scale, pan_x, pan_y) in device pixels
		dpr: Device pixel ratio
		img_fit: ImageFit (origin_x, origin_y, scale) inside the camera frame

	Returns:
		Vec2 in client pixels
	"""
	_check_scale('dpr', dpr)

	# Apply image placement
	frame_x = image_x * img_fit.scale + img_fit.origin_x
	frame_y = image_y * img_fit.scale + img_fit.origin_y

	# Apply camera zoom and pan
	device_x = frame_x * camera.scale + camera.pan_x
	device_y = frame_y * camera.scale + camera.pan_y

	# Back to client pixels
	client_x = device_x / dpr + viewport.left
	client_y = device_y / dpr + viewport.top

	return Vec2(client_x, client_y)


def calculate_fit_scale(img_w, img_h, container_w, container_h, padding=FIT_PADDING):
	"""Scale that fits the whole image inside the container.

	Returns:
		float: smaller of the two axis scales, or 1.0 for invalid dimensions
	"""
	if img_w <= 0 or img_h <= 0 or container_w <= 0 or container_h <= 0:
		return 1.0
	scale_x = (container_w * padding) / img_w
	scale_y = (container_h * padding) / img_h
	return min(scale_x, scale_y)


def calculate_center_pan(img_w, img_h, container_w, container_h, scale):
	"""Pan that centers a scaled image in the container.

	Returns:
		(pan_x, pan_y) tuple
	"""
	pan_x = (container_w - img_w * scale) / 2
	pan_y = (container_h - img_h * scale) / 2
	return (pan_x, pan_y)


def zoom_at_point(camera, new_scale, center):
	"""Zoom the camera while keeping a device-space point fixed on screen.

	Args:
		camera: Current Camera
		new_scale: Target camera scale
		center: Vec2 in device pixels that must not move

	Returns:
		New Camera
	"""
	_check_scale('camera.scale', camera.scale)
	ratio = new_scale / camera.scale
	pan_x = center.x - (center.x - camera.pan_x) * ratio
	pan_y = center.y - (center.y - camera.pan_y) * ratio
	return Camera(scale=new_scale, pan_x=pan_x, pan_y=pan_y)


def format_zoom_label(scale):
	"""Format camera scale as a percentage label (e.g. '150%')."""
	return f"{round(scale * 100)}%"
