import numpy as np

"""
Vector and color helpers shared by the ray tracer.

Points and directions are homogeneous coordinates: a point carries w = 1 and
a direction (translation) carries w = 0. They are kept as two separate
classes so that mixing them fails at the point of the mistake.
"""


def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)

def normalize(v):
    """Return a unit vector in the direction of the vector v."""
    return v / np.linalg.norm(v)


def _xyz(x, y, z):
    xyz = vec([x, y, z])
    if not np.all(np.isfinite(xyz)):
        raise ValueError(f"coordinates must be finite, got {xyz}")
    return xyz


class Point:
    """A location in space (homogeneous w = 1)."""

    __slots__ = ('_xyz',)

    # keep numpy scalars from broadcasting over us
    __array_ufunc__ = None

    W = 1.0

    def __init__(self, x, y, z):
        self._xyz = _xyz(x, y, z)
        self._xyz.flags.writeable = False

    @property
    def xyz(self):
        return self._xyz

    @property
    def homogeneous(self):
        return np.append(self._xyz, self.W)

    def __add__(self, other):
        if isinstance(other, Direction):
            return Point(*(self._xyz + other.xyz))
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Point):
            return Direction(*(self._xyz - other.xyz))
        if isinstance(other, Direction):
            return Point(*(self._xyz - other.xyz))
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return bool(np.array_equal(self._xyz, other.xyz))

    def __hash__(self):
        return hash(('Point', tuple(self._xyz)))

    def __iter__(self):
        return iter(self._xyz)

    def __repr__(self):
        return "Point({}, {}, {})".format(*self._xyz)


class Direction:
    """A displacement or direction (homogeneous w = 0)."""

    __slots__ = ('_xyz',)

    __array_ufunc__ = None

    W = 0.0

    def __init__(self, x, y, z):
        self._xyz = _xyz(x, y, z)
        self._xyz.flags.writeable = False

    @property
    def xyz(self):
        return self._xyz

    @property
    def homogeneous(self):
        return np.append(self._xyz, self.W)

    def magnitude(self):
        return float(np.linalg.norm(self._xyz))

    def normalized(self):
        m = self.magnitude()
        if m == 0.0:
            raise ValueError("cannot normalize a zero-length direction")
        return Direction(*(self._xyz / m))

    def __add__(self, other):
        if isinstance(other, Direction):
            return Direction(*(self._xyz + other.xyz))
        if isinstance(other, Point):
            return Point(*(self._xyz + other.xyz))
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Direction):
            return Direction(*(self._xyz - other.xyz))
        return NotImplemented

    def __mul__(self, scalar):
        if isinstance(scalar, (Point, Direction, np.ndarray)):
            return NotImplemented
        return Direction(*(self._xyz * float(scalar)))

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if isinstance(scalar, (Point, Direction, np.ndarray)):
            return NotImplemented
        return Direction(*(self._xyz / float(scalar)))

    def __neg__(self):
        return Direction(*(-self._xyz))

    def __eq__(self, other):
        if not isinstance(other, Direction):
            return NotImplemented
        return bool(np.array_equal(self._xyz, other.xyz))

    def __hash__(self):
        return hash(('Direction', tuple(self._xyz)))

    def __iter__(self):
        return iter(self._xyz)

    def __repr__(self):
        return "Direction({}, {}, {})".format(*self._xyz)


def point(x, y, z):
    """Create a point (w = 1)."""
    return Point(x, y, z)

def direction(x, y, z):
    """Create a direction / translation vector (w = 0)."""
    return Direction(x, y, z)

def from_homogeneous(v):
    """Convert a homogeneous 4-vector into a Point or a Direction.

    Raises ValueError when the fourth component is neither 1 nor 0.
    """
    v = vec(v)
    if v.shape != (4,):
        raise ValueError(f"expected a 4-vector, got shape {v.shape}")
    if v[3] == Point.W:
        return Point(*v[:3])
    if v[3] == Direction.W:
        return Direction(*v[:3])
    raise ValueError(f"w = {v[3]} is neither a point (1) nor a direction (0)")


def dot(a, b):
    """Dot product of two directions."""
    if not (isinstance(a, Direction) and isinstance(b, Direction)):
        raise TypeError("dot product is defined between directions only")
    return float(np.dot(a.xyz, b.xyz))

def cross(a, b):
    """Cross product of two directions."""
    if not (isinstance(a, Direction) and isinstance(b, Direction)):
        raise TypeError("cross product is defined between directions only")
    return Direction(*np.cross(a.xyz, b.xyz))


def is_color_intensity(x):
    """Test whether a scalar is an R, G or B intensity in [0, 1]."""
    return 0.0 <= x <= 1.0

def is_color(c):
    """Test whether a 3-vector is a valid R, G, B color."""
    c = np.asarray(c)
    return c.shape == (3,) and all(is_color_intensity(x) for x in c)

def color(r, g, b):
    """Create a color, rejecting channels outside [0, 1]."""
    c = vec([r, g, b])
    if not is_color(c):
        raise ValueError(f"color channels must lie in [0, 1], got {c}")
    return c

def as_color(c):
    """Validate an existing 3-vector as a color and return a float copy."""
    c = vec(c)
    if not is_color(c):
        raise ValueError(f"color channels must lie in [0, 1], got {c}")
    return c

def web_color(hex):
    """Convert a 24-bit hexadecimal web color such as 0xFF8800 to a color."""
    if not 0 <= hex <= 0xFFFFFF:
        raise ValueError(f"web color {hex:#x} is out of range")
    return color((hex >> 16) / 255.0, ((hex >> 8) & 0xFF) / 255.0, (hex & 0xFF) / 255.0)


def to_srgb(img):
    img_clip = np.clip(img, 0, 1)
    return np.where(img > 0.0031308, (1.055 * img_clip**(1/2.4) - 0.055), 12.92 * img_clip)

def to_srgb8(img):
    return np.clip(np.round(255.0 * to_srgb(img)), 0, 255).astype(np.uint8)
