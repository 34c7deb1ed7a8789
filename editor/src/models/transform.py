"""Transform data structures for coordinate and view state representation."""
from dataclasses import dataclass, field

from constants import DEFAULT_DEVICE_PIXEL_RATIO


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Screen space (client pixels as reported by the pointer device)
    - Image space (pixels intrinsic to the source photo)
    - Offsets and deltas (mask position, drag deltas)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor):
        return Vec2(self.x * factor, self.y * factor)

    def to_dict(self):
        return {'x': self.x, 'y': self.y}

    @classmethod
    def from_any(cls, value):
        """Build a Vec2 from a Vec2, an (x, y) pair or an {x, y} dict."""
        if isinstance(value, Vec2):
            return Vec2(value.x, value.y)
        if isinstance(value, dict):
            return cls(float(value.get('x', 0.0)), float(value.get('y', 0.0)))
        x, y = value
        return cls(float(x), float(y))


@dataclass
class Camera:
    """Pan/zoom applied between viewport space and the image-fit frame."""
    scale: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0


@dataclass
class ImageFit:
    """Placement of the source image inside the camera frame."""
    origin_x: float = 0.0
    origin_y: float = 0.0
    scale: float = 1.0


@dataclass
class Viewport:
    """Viewport bounds in client pixels (left/top of the drawing surface)."""
    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class ViewState:
    """Everything needed to map pointer events into image space.

    Supplied per-call by the rendering layer; the engine never caches it.
    """
    viewport: Viewport = field(default_factory=Viewport)
    camera: Camera = field(default_factory=Camera)
    dpr: float = DEFAULT_DEVICE_PIXEL_RATIO
    img_fit: ImageFit = field(default_factory=ImageFit)

    def to_image(self, client_x, client_y):
        """Map a client-space pointer position to image space."""
        from utils.coordinate_transforms import screen_to_image
        return screen_to_image(client_x, client_y, self.viewport, self.camera, self.dpr, self.img_fit)

    def to_screen(self, point):
        """Map an image-space point back to client space."""
        from utils.coordinate_transforms import image_to_screen
        return image_to_screen(point.x, point.y, self.viewport, self.camera, self.dpr, self.img_fit)
