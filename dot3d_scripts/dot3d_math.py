import numpy as np
from numba import njit

# tolerance used when deciding whether an angle has "arrived"
ANGLE_EPSILON = 0.1

DEG_TO_RAD = np.pi / 180

@njit()
def clamp(val, lower, upper):
    return min(max(val, lower), upper)

# ********  3D vector helpers:       ********

@njit()
def dot_3d(arr1, arr2):
    return arr1[0]*arr2[0] + arr1[1]*arr2[1] + arr1[2]*arr2[2]

# subtract b from a
@njit()
def subtract_3d(a, b):
    return np.asarray([a[0] - b[0], a[1] - b[1], a[2] - b[2]])

# length of a vector, using pythagorean theorem
@njit()
def length_3d(a):
    return np.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])

# calculate the cross product between two vectors
@njit()
def cross_3d(a,b):
    return np.asarray([a[1]*b[2] - a[2]*b[1],a[2]*b[0]-a[0]*b[2],a[0]*b[1]-a[1]*b[0]])

# takes in a vector, outputs that vector as a unit vector
# a zero vector stays a zero vector
def normalize_3d(a):
    l = length_3d(a)

    if (l == 0):
        return np.asarray([0.0,0.0,0.0])

    return np.asarray([a[0]/l,a[1]/l,a[2]/l])

# direction from one point to another, as a unit vector
def direction_3d(fromPoint, toPoint):
    return normalize_3d(subtract_3d(np.asarray(toPoint, dtype=np.float64), np.asarray(fromPoint, dtype=np.float64)))

# turns euler angles (degrees) into a forward and an up vector
# same convention as most engines: roll (z) first, then pitch (x), then yaw (y)
# positive pitch tilts the forward vector DOWN, positive yaw turns it towards +x
def euler_to_vectors(pitch, yaw, roll):
    p = pitch * DEG_TO_RAD
    y = yaw * DEG_TO_RAD
    r = roll * DEG_TO_RAD

    # roll only spins the up vector around the forward axis
    up = np.asarray([-np.sin(r), np.cos(r), 0.0])
    forward = np.asarray([0.0, 0.0, 1.0])

    # pitch, around x
    up = np.asarray([up[0], up[1] * np.cos(p) - up[2] * np.sin(p), up[1] * np.sin(p) + up[2] * np.cos(p)])
    forward = np.asarray([0.0, -np.sin(p), np.cos(p)])

    # yaw, around y
    up = np.asarray([up[0] * np.cos(y) + up[2] * np.sin(y), up[1], -up[0] * np.sin(y) + up[2] * np.cos(y)])
    forward = np.asarray([forward[0] * np.cos(y) + forward[2] * np.sin(y), forward[1], -forward[0] * np.sin(y) + forward[2] * np.cos(y)])

    return forward, up

# ********  scalar/angle helpers:       ********

# loops t so that it's never larger than length and never smaller than 0
def repeat(t, length):
    return clamp(t - np.floor(t / length) * length, 0.0, length)

# wraps an angle (degrees) into [0, 360)
def wrap_angle(angle):
    wrapped = angle % 360.0
    if (wrapped >= 360.0):
        return 0.0
    return wrapped

# the shortest difference between two angles, in [-180, 180]
def delta_angle(current, target):
    delta = repeat(target - current, 360.0)
    if (delta > 180.0):
        delta -= 360.0
    return delta

# move a value towards a target, never by more than max_delta
def move_towards(current, target, max_delta):
    if (np.abs(target - current) <= max_delta):
        return target
    return current + np.sign(target - current) * max_delta

# same as above, but wraps around 360 degrees properly
# the result is NOT wrapped, so it can end up outside [0, 360)
def move_towards_angle(current, target, max_delta):
    delta = delta_angle(current, target)
    if (-max_delta < delta and delta < max_delta):
        return target
    target = current + delta
    return move_towards(current, target, max_delta)

# true if two angles (degrees) point the same way, within ANGLE_EPSILON
def angles_match(a, b):
    return np.abs(delta_angle(a, b)) < ANGLE_EPSILON
