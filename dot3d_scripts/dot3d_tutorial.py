# Dot Product Tutorial
#
# Shows what the dot product of two directions tells you:
# - two spheres (A and B) that move back and forth
# - two spheres (X and Y) that keep turning 180 degrees
# - two labels saying, for each pair, whether the first sphere's front is pointing towards or away from the second
#
# Call awake() once after the engine is started, then update() every frame.

import logging

import numpy as np
from . import dot3d as engine
from . import dot3d_math as m
from .dot3d import Color

logger = logging.getLogger(__name__)

# the three things the sign of a dot product can tell you
AWAY = "away"
TOWARDS = "towards"
PERPENDICULAR = "perpendicular"

FIRST_RESULT_TEXT = {
    AWAY: "1st Result: A's front is pointing away from B.",
    TOWARDS: "1st Result: A's front is pointing towards B.",
    PERPENDICULAR: "1st Result: The directions of A and B are perpendicular to each other, indicating they are positioned at a 90-degree angle relative to each other.",
}

SECOND_RESULT_TEXT = {
    AWAY: "2nd Result: X's front is pointing away from Y",
    TOWARDS: "2nd Result: X's front is pointing towards Y",
    PERPENDICULAR: "2nd Result: The directions of X and Y are perpendicular to each other, indicating they are positioned at a 90-degree angle relative to each other",
}

# the speed slider only goes from 1 to 2
MIN_SPEED = 1.0
MAX_SPEED = 2.0

# units per second, and degrees per second, at a speed of 1
MOVE_SPEED_FACTOR = 0.15
TURN_SPEED_FACTOR = 16.0

# label settings, a big font at a small scale
LABEL_FONT_SIZE = 500
LABEL_SCALE = 0.01

# the sign of a dot product, as a word
# a tolerance of 0 means only an exact 0 counts as perpendicular
def classify_dot(dot, tolerance=0.0):
    if (dot < -tolerance):
        return AWAY
    elif (dot > tolerance):
        return TOWARDS
    return PERPENDICULAR

# dot product between where something is facing and the direction to something else
def facing_dot(forward, fromPosition, toPosition):
    return m.dot_3d(np.asarray(forward, dtype=np.float64), m.direction_3d(fromPosition, toPosition))

# moves a distance back and forth between -limit and limit
# returns the new distance and whether it's still moving forward
def ping_pong_step(distance, moving, step, limit):
    if (moving):
        distance += step
        if (distance >= limit):
            distance = limit
            moving = False
    else:
        distance -= step
        if (distance <= -limit):
            distance = -limit
            moving = True

    return distance, moving

def flip_target(angle):
    if (angle == 90.0):
        return -90.0
    return 90.0

class DotProductTutorial:
    def __init__(self, speed=1.0, perpendicular_tolerance=1e-3):
        speed = float(speed)
        if (not np.isfinite(speed)):
            # nan/inf would turn every position into nan
            clampedSpeed = MIN_SPEED
        else:
            clampedSpeed = m.clamp(speed, MIN_SPEED, MAX_SPEED)
        if (clampedSpeed != speed):
            logger.debug("speed %s is outside [%s, %s], using %s", speed, MIN_SPEED, MAX_SPEED, clampedSpeed)
        self.speed = clampedSpeed

        if (not np.isfinite(perpendicular_tolerance) or perpendicular_tolerance < 0):
            raise ValueError("perpendicular_tolerance has to be a finite number, 0 or more (got %r)" % (perpendicular_tolerance,))
        self.perpendicularTolerance = perpendicular_tolerance

        # results of the dot product calculations, in [-1, 1]
        self.firstDotProduct = 0.0
        self.secondDotProduct = 0.0

        self.root = None

        # first example: A and B slide back and forth
        self.firstExample = None
        self.probeA = None
        self.probeB = None
        self.labelA = None
        self.labelB = None
        self.firstResultLabel = None
        self.moveDistance = 0.5
        self.distanceA = 0.0
        self.distanceB = 0.0
        self.movingA = True
        self.movingB = True

        # second example: X and Y turn between +90 and -90 degrees
        self.secondExample = None
        self.probeX = None
        self.probeY = None
        self.labelX = None
        self.labelY = None
        self.secondResultLabel = None
        self.targetAngleX = 90.0
        self.targetAngleY = 90.0
        self.probeYWaiting = False

        self.cameraObject = None

    # builds the whole scene
    def awake(self):
        self.root = engine.spawnEmpty("Dot Product Tutorial", 0.0, 0.0, 0.0, [])

        # first example ***********************************
        self.firstExample = self.create_group("First Example", 1.75)

        self.probeA, self.labelA = self.create_probe("A", self.firstExample, -2.0, Color.RED)
        self.probeB, self.labelB = self.create_probe("B", self.firstExample, 2.0, Color.BLUE)

        self.firstResultLabel = self.create_result_label("First Result", self.firstExample, -4.75, 3.5, 2.5)

        # second example ***********************************
        self.secondExample = self.create_group("Second Example", -1.75)

        self.probeX, self.labelX = self.create_probe("X", self.secondExample, -2.0, Color.GREEN)
        self.probeY, self.labelY = self.create_probe("Y", self.secondExample, 2.0, Color.YELLOW)

        self.secondResultLabel = self.create_result_label("Second Result", self.secondExample, -4.75, 3.5, -2.5)

        # camera, looking straight down ***********************************
        self.cameraObject = engine.spawnEmpty("Tutorial Camera", 0.0, 0.0, 0.0, ["camera_parent"])
        self.cameraObject.setParent(self.root)
        self.cameraObject.set_local_position(0.0, 9.0, 0.0)
        self.cameraObject.set_local_euler(90.0, 0.0, 0.0)

        engine.parentCamera(self.cameraObject, 0.0, 0.0, 0.0)
        engine.setCameraRotation(0.0, 0.0, 0.0)
        engine.setProjection("orthographic")
        engine.setOrthographicSize(5.0)

        logger.info("dot product tutorial built at speed %s", self.speed)

    def create_group(self, name, z):
        group = engine.spawnEmpty(name, 0.0, 0.0, 0.0, [])
        group.setParent(self.root)
        group.set_local_position(0.0, 0.0, z)

        return group

    # a sphere, with a thin cube sticking out of its front and a letter floating above it
    def create_probe(self, letter, parent, x, color):
        probe = engine.spawnSphere(letter, 0.0, 0.0, 0.0, ["probe"], color)
        probe.setParent(parent)
        probe.set_local_position(x, 0.0, 0.0)

        forwardAxis = engine.spawnScaledCube(letter + " Forward", 0.0, 0.0, 0.0, 0.04, 0.04, 0.6, [], Color.BLUE)
        forwardAxis.setParent(probe)
        forwardAxis.set_local_position(0.0, 0.0, 0.6)

        label = self.create_label(letter + " (Text)", letter, probe, 0.0, 1.5, 0.0, "middle center")

        return probe, label

    def create_result_label(self, name, parent, x, y, z):
        return self.create_label(name + " (Text)", "Object: " + name, parent, x, y, z, "middle left")

    def create_label(self, name, text, parent, x, y, z, anchor):
        label = engine.spawnText(name, text, parent, x, y, z, [], Color.WHITE, LABEL_FONT_SIZE, anchor)
        label.set_local_euler(90.0, 0.0, 0.0)
        label.set_scale(LABEL_SCALE, LABEL_SCALE, LABEL_SCALE)

        return label

    # call every frame, dt is in seconds
    def update(self, dt):
        self.update_first_example(dt)
        self.update_second_example(dt)
        self.hold_labels()

        self.calculate_dot_products()

    def update_first_example(self, dt):
        step = self.speed * MOVE_SPEED_FACTOR * dt

        wasMovingA = self.movingA
        wasMovingB = self.movingB
        self.distanceA, self.movingA = ping_pong_step(self.distanceA, self.movingA, step, self.moveDistance)
        self.distanceB, self.movingB = ping_pong_step(self.distanceB, self.movingB, step, self.moveDistance)

        if (wasMovingA != self.movingA or wasMovingB != self.movingB):
            logger.debug("first example turned around (A forward: %s, B forward: %s)", self.movingA, self.movingB)

        # A moves along its front, B along its back
        self.probeA.add_position_vector(self.probeA.get_forward() * step * (1 if self.movingA else -1))
        self.probeB.add_position_vector(-self.probeB.get_forward() * step * (1 if self.movingB else -1))

    def update_second_example(self, dt):
        turn = self.speed * TURN_SPEED_FACTOR * dt

        newYawX = m.move_towards_angle(self.probeX.get_local_yaw(), self.targetAngleX, turn)
        self.probeX.set_local_yaw(newYawX)

        if (np.abs(newYawX - self.targetAngleX) < m.ANGLE_EPSILON):
            self.targetAngleX = flip_target(self.targetAngleX)
            logger.debug("X reached its target, now turning to %s", self.targetAngleX)

        # Y waits for X to line up at 270 (-90) before turning again, so they stay in step
        if (not self.probeYWaiting):
            newYawY = m.move_towards_angle(self.probeY.get_local_yaw(), self.targetAngleY, turn)
            self.probeY.set_local_yaw(newYawY)

            if (np.abs(newYawY - self.targetAngleY) < m.ANGLE_EPSILON):
                self.targetAngleY = flip_target(self.targetAngleY)

                if (not m.angles_match(self.probeX.get_local_yaw(), 270.0)):
                    self.probeYWaiting = True
                    logger.debug("Y is waiting for X")
        elif (m.angles_match(self.probeX.get_local_yaw(), 270.0)):
            self.probeYWaiting = False
            logger.debug("Y is turning again")

    # the X and Y labels turn with their spheres, so they're turned back to match the result label
    def hold_labels(self):
        resultYaw = self.secondResultLabel.get_world_yaw()

        self.labelX.set_world_yaw(resultYaw)
        self.labelY.set_world_yaw(resultYaw)

    def calculate_dot_products(self):
        # direction A is facing, against the direction from A to B
        self.firstDotProduct = facing_dot(self.probeA.get_forward(), self.probeA.get_position(), self.probeB.get_position())
        self.firstResultLabel.set_text(FIRST_RESULT_TEXT[classify_dot(self.firstDotProduct, self.perpendicularTolerance)])

        # same thing for X and Y
        self.secondDotProduct = facing_dot(self.probeX.get_forward(), self.probeX.get_position(), self.probeY.get_position())
        self.secondResultLabel.set_text(SECOND_RESULT_TEXT[classify_dot(self.secondDotProduct, self.perpendicularTolerance)])

        return self.firstDotProduct, self.secondDotProduct
