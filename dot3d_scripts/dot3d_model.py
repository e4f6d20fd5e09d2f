import logging

import numpy as np
from . import dot3d_math as m

logger = logging.getLogger(__name__)

class Model:
    _registry = []

    def __init__(self, name, points, triangles, tags, color):
        self.name = name

        # the engine looks for some tags, like "text" or "camera_parent"
        # (copied, so adding a tag never changes the list that was passed in)
        self.tags = list(tags)

        # the world and local transforms of an object
        # both the same, since obj doesn't start out as a child
        self.localTransform = ModelTransform(np.asarray([0.0,0.0,0.0]), np.asarray([0.0,0.0,1.0]), np.asarray([0.0,1.0,0.0]), np.asarray([1.0,1.0,1.0]))
        self.worldTransform = ModelTransform(np.asarray([0.0,0.0,0.0]), np.asarray([0.0,0.0,1.0]), np.asarray([0.0,1.0,0.0]), np.asarray([1.0,1.0,1.0]))

        # local rotation as euler angles (pitch, yaw, roll), in degrees
        # the forward/up vectors of the local transform are always rebuilt from these
        self.localEuler = np.asarray([0.0,0.0,0.0])

        self._registry.append(self)
        # points are stored using nine numbers
        # the first three is the point as it appears in the mesh
        # the next three is the point as it appears in the scene (world space)
        # the final three is the point as it appears projected onto the screen (x, y, depth)
        self.points = points
        self.triangles = triangles

        # whether to render the object or not
        self.shouldBeDrawn = True

        self.parent = None
        self.children = []
        # how many parents does this object have?
        # not a child --> 0
        # child of an object --> 1
        # child of an object, which itself is a child of an object --> 2
        # it's used to sort the heirarchy so that transforms can be applied properly
        self.childLevel = 0

        # the color applies to all geometry
        self.color = np.asarray(color).astype('uint8')

    # transform stuff ********************************************

    # set the transform based on the parent
    def syncTransformWithParent(self):
        # DO NOT CHANGE THE LOCAL TRANSFORM
        self.worldTransform.copy(self.localTransform)

        if (self.parent == None):
            return

        self.worldTransform.add_self_to_other(self.parent.worldTransform) # the parent's world transform HAS TO BE DONE FIRST

    def setParent(self, otherObject):
        # if the object WAS a child, remove all refs
        if (self.parent != None):
            self.parent.children.remove(self)

        if (otherObject == None):
            # that way, you can call setParent(None) to make it not a child
            self.parent = None
            self.childLevel = 0
            self.syncTransformWithParent()
            self.syncChildren()
            refreshHeirarchy()
            return

        self.parent = otherObject
        self.childLevel = otherObject.childLevel + 1
        otherObject.children.append(self)
        logger.debug("parented %s to %s", self.name, otherObject.name)

        self.syncTransformWithParent()
        self.syncChildren()

        refreshHeirarchy()

    # again, so I don't have to call 2 functions
    def syncChildren(self):
        self.syncChildrenLevels()
        self.syncChildrenTransforms()
    # loop through all children and refresh their child level
    def syncChildrenLevels(self):
        for i in self.children:
            i.childLevel = self.childLevel + 1
            i.syncChildrenLevels()
    # loop through all children and refresh their transforms
    def syncChildrenTransforms(self):
        for i in self.children:
            i.syncTransformWithParent()
            i.syncChildrenTransforms()

    # hidden objects are skipped by the renderer
    def hide(self):
        self.shouldBeDrawn = False

    # whether the tags array has a given tag
    def hasTag(self, tag):
        return tag in self.tags

    def add_tag(self, tagName):
        if (tagName in self.tags):
            return
        self.tags.append(tagName)

    # when messing with models, please use the functions and don't mess with the variables themselves!
    # ESPECIALLY WITH TRANSFORM-COMPONENT STUFF, it makes life easier (and doesn't break the heirarchy)

    # set position to some numbers
    # this sets the LOCAL POSITION
    def set_local_position(self, x, y, z):
        self.localTransform.position[0] = x
        self.localTransform.position[1] = y
        self.localTransform.position[2] = z

        self.syncTransformWithParent() # refreshing the world transform
        self.syncChildren()

    # translate with individual numbers
    def add_local_position(self, x, y, z):
        self.localTransform.position[0] += x
        self.localTransform.position[1] += y
        self.localTransform.position[2] += z

        self.syncTransformWithParent() # refreshing the world transform
        self.syncChildren()

    # translate by a WORLD SPACE vector, regardless of how the parent is rotated/scaled
    def add_position_vector(self, world_vector):
        if (self.parent == None):
            self.add_local_position(world_vector[0], world_vector[1], world_vector[2])
            return

        parentTransform = self.parent.worldTransform
        right = parentTransform.get_right()

        self.add_local_position(m.dot_3d(world_vector, right) / parentTransform.scale[0],
                                m.dot_3d(world_vector, parentTransform.up) / parentTransform.scale[1],
                                m.dot_3d(world_vector, parentTransform.forward) / parentTransform.scale[2])

    def get_position(self):
        return self.worldTransform.position

    def get_forward(self):
        return self.worldTransform.forward

    def get_up(self):
        return self.worldTransform.up

    # rotation, using euler angles (degrees)
    def set_local_euler(self, pitch, yaw, roll):
        self.localEuler[0] = m.wrap_angle(pitch)
        self.localEuler[1] = m.wrap_angle(yaw)
        self.localEuler[2] = m.wrap_angle(roll)

        forward, up = m.euler_to_vectors(self.localEuler[0], self.localEuler[1], self.localEuler[2])
        self.localTransform.forward[:] = forward
        self.localTransform.up[:] = up

        self.syncTransformWithParent() # refreshing the world transform
        self.syncChildren()

    # the yaw is always reported in [0, 360)
    def get_local_yaw(self):
        return self.localEuler[1]

    def set_local_yaw(self, yaw):
        self.set_local_euler(self.localEuler[0], yaw, self.localEuler[2])

    # world yaw, only meaningful when the parents only ever turn around y
    def get_world_yaw(self):
        yaw = self.localEuler[1]
        parent = self.parent
        while (parent != None):
            yaw += parent.localEuler[1]
            parent = parent.parent

        return m.wrap_angle(yaw)

    # turn the object so its world yaw matches, keeping its own pitch and roll
    def set_world_yaw(self, yaw):
        parentYaw = 0.0
        if (self.parent != None):
            parentYaw = self.parent.get_world_yaw()

        self.set_local_yaw(yaw - parentYaw)

    # set scale with three numbers
    def set_scale(self, a, b, c):
        self.localTransform.scale[0] = a
        self.localTransform.scale[1] = b
        self.localTransform.scale[2] = c

        self.syncTransformWithParent() # refreshing the world transform
        self.syncChildren()

    # moves every mesh point into world space (indices 3,4,5)
    def transform_points(self):
        t = self.worldTransform
        basis = np.stack((t.get_right(), t.up, t.forward))

        # scale first, then rotation, then position
        self.points[:,3:6] = (self.points[:,0:3] * t.scale) @ basis + t.position

        return self.points

# essentially a unity transform component:
# since objects have parents and children, every object will have a WORLD set of transforms and a set of LOCAL transforms
class ModelTransform:
    # scale, then rotation, then position is applied, in that order, when transforming
    def __init__(self, pos, f, u, scl):
        self.position = pos

        self.forward = f
        self.up = u

        self.scale = scl

    # copy the data from another transform
    # (element by element, other code holds references to these arrays)
    def copy(self, otherTransform):
        self.position[:] = otherTransform.position
        self.scale[:] = otherTransform.scale
        self.forward[:] = otherTransform.forward
        self.up[:] = otherTransform.up

    def get_right(self):
        crossProduct = m.normalize_3d(m.cross_3d(self.forward, self.up))

        # negative, because we're using a left-handed coordinate system
        return np.asarray([-crossProduct[0],-crossProduct[1],-crossProduct[2]])

    # it adds THE CURRENT TRANSFORM DATA to ANOTHER SET OF TRANSFORM DATA
    # (not adding another set to this set)

    # this is how world-space transforms are calculated:
    # the local transform is added to the PARENT'S world transform
    def add_self_to_other(self, otherTransform):
        otherRight = otherTransform.get_right()

        # local vectors are expressed along the parent's axes
        scaledPosition = self.position * otherTransform.scale
        newPosition = otherTransform.position + otherRight * scaledPosition[0] + otherTransform.up * scaledPosition[1] + otherTransform.forward * scaledPosition[2]
        newForward = otherRight * self.forward[0] + otherTransform.up * self.forward[1] + otherTransform.forward * self.forward[2]
        newUp = otherRight * self.up[0] + otherTransform.up * self.up[1] + otherTransform.forward * self.up[2]

        self.position[:] = newPosition
        self.forward[:] = newForward
        self.up[:] = newUp

        # scales are multiplied, because if this one is 2 and the other one is 4,
        # then it should be 2 times 4, or 8
        self.scale *= otherTransform.scale

# ********  heirarchy helpers:       ********

# called WHENEVER THE HEIRARCHY CHANGES,
# and is NOT called during position/rotation updates
def refreshHeirarchy():
    refreshObjectOrder()
    refreshObjectTransforms()

# sorts the registry by child level, so parents always come before their children
# (the sort is stable, so spawn order is kept within a level)
def refreshObjectOrder():
    Model._registry.sort(key=lambda i: i.childLevel)

# with the heirarchy sorted, every object can just sync with its (already synced) parent
def refreshObjectTransforms():
    for i in Model._registry:
        i.syncTransformWithParent()

# ********  procedural meshes:       ********

# a mesh file would normally be loaded here, but the scene only needs spheres and cubes
def empty_points():
    return np.zeros((0, 9))

def empty_triangles():
    return np.zeros((0, 3)).astype(np.int32)

# a uv-sphere, centered on the origin
def sphere_mesh(radius, rings, segments):
    points = []

    # poles are shared, every ring in between has one point per segment
    points.append([0.0, radius, 0.0])
    for ring in range(1, rings):
        theta = np.pi * ring / rings
        for segment in range(segments):
            phi = 2 * np.pi * segment / segments
            points.append([radius * np.sin(theta) * np.sin(phi), radius * np.cos(theta), radius * np.sin(theta) * np.cos(phi)])
    points.append([0.0, -radius, 0.0])

    bottomIndex = len(points) - 1
    triangles = []

    # top cap
    for segment in range(segments):
        triangles.append([0, 1 + segment, 1 + (segment + 1) % segments])

    # the quads between rings, as two triangles each
    for ring in range(rings - 2):
        start = 1 + ring * segments
        nextStart = start + segments
        for segment in range(segments):
            a = start + segment
            b = start + (segment + 1) % segments
            c = nextStart + segment
            d = nextStart + (segment + 1) % segments
            triangles.append([a, c, b])
            triangles.append([b, c, d])

    # bottom cap
    start = 1 + (rings - 2) * segments
    for segment in range(segments):
        triangles.append([bottomIndex, start + (segment + 1) % segments, start + segment])

    return to_points(points), np.asarray(triangles).astype(np.int32)

# a cube with a side length of 1, centered on the origin
def cube_mesh():
    corners = []
    for x in (-0.5, 0.5):
        for y in (-0.5, 0.5):
            for z in (-0.5, 0.5):
                corners.append([x, y, z])

    # corner index = x * 4 + y * 2 + z, where each is 0 or 1
    faces = [
        [0, 1, 3, 2], # -x
        [4, 6, 7, 5], # +x
        [0, 4, 5, 1], # -y
        [2, 3, 7, 6], # +y
        [0, 2, 6, 4], # -z
        [1, 5, 7, 3], # +z
    ]

    triangles = []
    for face in faces:
        triangles.append([face[0], face[1], face[2]])
        triangles.append([face[0], face[2], face[3]])

    return to_points(corners), np.asarray(triangles).astype(np.int32)

# turns a list of (x,y,z) into the nine-number point layout
def to_points(rawPoints):
    points = np.zeros((len(rawPoints), 9))
    points[:,0:3] = np.asarray(rawPoints)
    return points
