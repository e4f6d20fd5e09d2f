# a small software renderer, just enough to run the dot product tutorial scene
# (scene objects with parents, spheres/cubes, an orthographic camera, and text labels)

import logging

import pygame as pg
import numpy as np
from .dot3d_model import Model
from .dot3d_model import ModelTransform
from .dot3d_text import TextLabel
from . import dot3d_model
from . import dot3d_math as m
from . import dot3d_rendering

logger = logging.getLogger(__name__)

# this is the default sky color, but can be set using setBackGroundColor()
skyColor = np.asarray([1.0,1.0,1.0])

# like a directional light in unity
lightDirection = np.asarray([0.0,1.0,0.0])

# clock stuff
clock = pg.time.Clock()
hasClockStarted = False # the first frame always has a delta time of 0
timeSinceLastFrame = 0

# the camera
# position (x,y,z), forward (x,y,z), up (x,y,z) (scale does nothing)
cameraWorldTransform = None
cameraLocalTransform = None
cameraParent = None

# orthographic or perspective, and how much of the world an orthographic camera sees
cameraProjection = "orthographic"
cameraOrthographicSize = 5.0

# sphere detail, more rings/segments look nicer but render slower
sphereRings = 10
sphereSegments = 16

# ********      main engine functions:     ********
def init(w, h, wActual, hActual, ver, fullscreen=False):
    global clock
    global hasClockStarted
    global timeSinceLastFrame

    verticalFOV = ver * np.pi / 180

    dot3d_rendering.init(w, h, verticalFOV, cameraProjection, cameraOrthographicSize, "shaded", "solid color", wActual, hActual)

    # required for pygame to work properly
    pg.init()

    clock = pg.time.Clock()
    hasClockStarted = False
    timeSinceLastFrame = 0

    resetCamera()

    flags = 0
    if (fullscreen):
        flags = pg.FULLSCREEN

    pg.display.set_mode((wActual, hActual), flags)
    pg.display.set_caption("Dot Product Tutorial")

    logger.info("engine started: render %dx%d, display %dx%d, %s projection", w, h, wActual, hActual, dot3d_rendering.renderConfig.projection)

# puts the camera back at the origin, looking down +z, with no parent
def resetCamera():
    global cameraLocalTransform
    global cameraWorldTransform
    global cameraParent

    # scale does nothing
    cameraLocalTransform = ModelTransform(np.asarray([0.0, 0.0, 0.0]), np.asarray([0.0, 0.0, 1.0]), np.asarray([0.0, 1.0, 0.0]), np.asarray([1.0, 1.0, 1.0]))
    cameraWorldTransform = ModelTransform(np.asarray([0.0, 0.0, 0.0]), np.asarray([0.0, 0.0, 1.0]), np.asarray([0.0, 1.0, 0.0]), np.asarray([1.0, 1.0, 1.0]))
    cameraParent = None

resetCamera()

# off by default, the sphere and cube meshes are wound so only their inside faces get culled
def enableBackfaceCulling():
    dot3d_rendering.renderConfig.backfaceCulling = True

def setRenderingMode(newMode):
    if (newMode in dot3d_rendering.renderingModes):
        dot3d_rendering.renderConfig.renderingMode = newMode
    else:
        logger.warning("unknown rendering mode %r, keeping %r", newMode, dot3d_rendering.renderConfig.renderingMode)

def setBackgroundMode(newMode):
    if (newMode in dot3d_rendering.backGroundModes):
        dot3d_rendering.renderConfig.backgroundMode = newMode
    else:
        logger.warning("unknown background mode %r, keeping %r", newMode, dot3d_rendering.renderConfig.backgroundMode)

# the camera settings can be changed before init(), they're handed to the renderer when it exists
def setProjection(newProjection):
    global cameraProjection

    if (newProjection not in dot3d_rendering.projections):
        logger.warning("unknown projection %r, keeping %r", newProjection, cameraProjection)
        return

    cameraProjection = newProjection
    if (dot3d_rendering.renderConfig != None):
        dot3d_rendering.renderConfig.projection = newProjection

# half of the visible height, in world units
def setOrthographicSize(size):
    global cameraOrthographicSize

    cameraOrthographicSize = size
    if (dot3d_rendering.renderConfig != None):
        dot3d_rendering.renderConfig.orthographicSize = size

def setBackGroundColor(r,g,b):
    global skyColor
    skyColor = np.asarray([r/255,g/255,b/255])

# call once per frame, BEFORE moving anything
def update():
    global timeSinceLastFrame
    global hasClockStarted

    timeSinceLastFrame = clock.tick()*0.001

    if (not hasClockStarted):
        timeSinceLastFrame = 0
        hasClockStarted = True

    return timeSinceLastFrame

# refreshing the camera's transform, the parent's world transform has to be up to date
def refreshCameraTransform():
    cameraWorldTransform.copy(cameraLocalTransform)
    if (cameraParent != None):
        cameraWorldTransform.add_self_to_other(cameraParent.worldTransform)

    return cameraWorldTransform

def getFrame():
    refreshCameraTransform()

    frame = np.ones((dot3d_rendering.renderConfig.screenWidth, dot3d_rendering.renderConfig.screenHeight, 3)).astype('uint8')
    z_buffer = np.zeros((dot3d_rendering.renderConfig.screenWidth, dot3d_rendering.renderConfig.screenHeight)) # start with some SMALL value
    # the value is small because the z buffer stores values of 1/z, so 0 represents the largest depth possible (it would be 1/infinity)

    dot3d_rendering.draw_background(frame, skyColor)

    light_dir = m.normalize_3d(lightDirection)

    # draw the frame
    for model in Model._registry:
        if (model.shouldBeDrawn and len(model.triangles) > 0):
            dot3d_rendering.draw_model(model, frame, z_buffer, cameraWorldTransform, light_dir)

    return frame

def drawScreen(frame):
    # turn the frame into a surface
    surf = pg.transform.scale(pg.surfarray.make_surface(frame),(dot3d_rendering.renderConfig.screenWidth_actual,dot3d_rendering.renderConfig.screenHeight_actual))
    # blit that (draw it) onto the screen
    pg.display.get_surface().blit(surf, (0,0))

# text goes on top of everything, call this AFTER drawScreen()
def drawLabels(surface=None):
    if (surface == None):
        surface = pg.display.get_surface()

    return dot3d_rendering.draw_text_labels(surface, getObjectsWithTag("text"), cameraWorldTransform)

def update_display():
    pg.display.update()

def quit():
    # cached fonts die with pygame
    dot3d_rendering.fontCache.clear()
    pg.quit()

# ********   camera:     ********

# the camera follows an object around, with an offset in the object's local space
def parentCamera(object, offset_x, offset_y, offset_z):
    global cameraParent

    cameraParent = object
    cameraLocalTransform.position[:] = np.asarray([offset_x, offset_y, offset_z])

def setCameraPosition(x,y,z):
    cameraLocalTransform.position[:] = np.asarray([x,y,z])

# euler angles in degrees, like objects
def setCameraRotation(pitch, yaw, roll):
    forward, up = m.euler_to_vectors(pitch, yaw, roll)

    cameraLocalTransform.forward[:] = forward
    cameraLocalTransform.up[:] = up

# ********   OBJECT functions:     ********

# a group object with no mesh, only used for parenting
def spawnEmpty(name, x,y,z, tags):
    objName = nameModel(name)
    newObj = Model(objName, dot3d_model.empty_points(), dot3d_model.empty_triangles(), tags, Color.WHITE)

    newObj.set_local_position(x,y,z)

    return newObj

# spheres have a diameter of 1
def spawnSphere(name, x,y,z, tags, color):
    objName = nameModel(name)
    points, triangles = dot3d_model.sphere_mesh(0.5, sphereRings, sphereSegments)
    newObj = Model(objName, points, triangles, tags, color)

    newObj.set_local_position(x,y,z)

    return newObj

# cubes have a side length of 1
def spawnCube(name, x,y,z, tags, color):
    objName = nameModel(name)
    points, triangles = dot3d_model.cube_mesh()
    newObj = Model(objName, points, triangles, tags, color)

    newObj.set_local_position(x,y,z)

    return newObj

def spawnScaledCube(name, x,y,z, scale_x,scale_y,scale_z, tags, color):
    newObj = spawnCube(name, x,y,z, tags, color)
    newObj.set_scale(scale_x,scale_y,scale_z)

    return newObj

def spawnText(name, text, parent, x,y,z, tags, color, font_size, anchor):
    objName = nameModel(name)
    newObj = TextLabel(objName, text, tags, color, font_size, anchor)

    if (parent != None):
        newObj.setParent(parent)
    newObj.set_local_position(x,y,z)

    return newObj

def getObjectIndex(name):
    counter = 0
    for i in Model._registry:
        if (i.name == name):
            return counter
        counter += 1

def destroyObject(obj):
    global cameraParent

    # any children of the object will have their parent set as none
    # regardless if this object was itself a child or not
    for i in list(obj.children):
        i.setParent(None)

    if (obj.parent != None):
        obj.setParent(None)

    Model._registry.pop(getObjectIndex(obj.name))

    # the camera parent might have a reference to it as well
    if (cameraParent != None and cameraParent.name == obj.name):
        cameraParent = None

def destroyObjectWithName(objectName):
    obj = getObject(objectName)
    if (obj != None):
        destroyObject(obj)

def destroyAllObjects():
    length = len(Model._registry)
    for i in range(length):
        # from the back, so the children go first
        destroyObject(Model._registry[length - 1 - i])

def getObjectsWithTag(tag):
    toReturn = []
    for i in Model._registry:
        if (i.hasTag(tag)):
            toReturn.append(i)

    return toReturn

# makes sure that all objects have unique names by adding (1),(2),(3) to a name
def nameModel(attemptedName):
    if (getObject(attemptedName) == None):
        return attemptedName

    counter = 1
    while (getObject(attemptedName + "(" + str(counter) + ")") != None):
        counter += 1

    return attemptedName + "(" + str(counter) + ")"

def getObject(name):
    for i in Model._registry:
        if (i.name == name):
            return i

    return None

# Essentially shorthand for common colors, to make code more readable
# these shouldn't be changing, so they're all constants
class Color:
    WHITE = np.asarray([255,255,255]).astype('uint8')
    BLACK = np.asarray([0,0,0]).astype('uint8')

    RED = np.asarray([255,0,0]).astype('uint8')
    GREEN = np.asarray([0,255,0]).astype('uint8')
    BLUE = np.asarray([0,0,255]).astype('uint8')

    # unity's yellow is slightly orange
    YELLOW = np.asarray([255,235,4]).astype('uint8')
