import logging

import numpy as np
import pygame as pg
from numba import njit
from . import dot3d_math as m

logger = logging.getLogger(__name__)

renderConfig = None

# possible rendering modes
# "shaded" lights every triangle using the light direction
# "flat" just uses the model color
renderingModes = ["shaded","flat"]

# possible background modes
backGroundModes = ["solid color","gradient"]

# possible projections
projections = ["orthographic","perspective"]

# anything closer to the camera than this is not drawn
nearPlane = 0.01

# how much light a triangle gets even when facing away from the light
ambientLight = 0.35

# this piece of code is brought to you by: me being tired of passing variables around
class RenderingConfig:
    def __init__(self, rMode, bfCulling, sWidth, sHeight, vFov, projection, orthoSize, bMode, sWA, sHA):
        # shaded? flat?
        self.renderingMode = rMode
        # solid color? gradient?
        self.backgroundMode = bMode
        # do I not render away-facing faces?
        self.backfaceCulling = bfCulling
        # the render-resolution
        self.screenWidth = sWidth
        self.screenHeight = sHeight
        # the vertical fov (radians), only used by the perspective projection
        self.verticalFOV = vFov
        self.horizontalFOV = vFov * sWidth / sHeight
        # projection adjustments (aka magic), stored so as to make calculations easier
        self.hor_fov_adjust = 0.5 * sWidth / np.tan(self.horizontalFOV * 0.5)
        self.ver_fov_adjust = 0.5 * sHeight / np.tan(self.verticalFOV * 0.5)
        # orthographic or perspective
        self.projection = projection
        # half of the view height, in world units (orthographic only)
        self.orthographicSize = orthoSize

        # display resolution (scaled to this)
        self.screenWidth_actual = sWA
        self.screenHeight_actual = sHA

def init(w, h, vertfov, projection, orthoSize, r, b, swa, sha):
    global renderConfig

    if (projection not in projections):
        logger.warning("unknown projection %r, using orthographic", projection)
        projection = "orthographic"

    renderConfig = RenderingConfig(r, False, w, h, vertfov, projection, orthoSize, b, swa, sha)

# how many render pixels one world unit covers, at some depth
def pixels_per_unit(depth):
    if (renderConfig.projection == "orthographic"):
        return 0.5 * renderConfig.screenHeight / renderConfig.orthographicSize

    return renderConfig.ver_fov_adjust / max(np.abs(depth), nearPlane)

# turns the world space points (indices 3,4,5) into screen space points (indices 6,7,8)
# index 8 is the depth along the camera's forward vector
def project_points(points, cameraTransform):
    relative = points[:,3:6] - cameraTransform.position

    camX = relative @ cameraTransform.get_right()
    camY = relative @ cameraTransform.up
    camZ = relative @ cameraTransform.forward

    if (renderConfig.projection == "orthographic"):
        ppu = pixels_per_unit(0)
        points[:,6] = camX * ppu + 0.5 * renderConfig.screenWidth
        points[:,7] = -camY * ppu + 0.5 * renderConfig.screenHeight
    else:
        safeZ = np.maximum(np.abs(camZ), nearPlane)
        points[:,6] = renderConfig.hor_fov_adjust * camX / safeZ + 0.5 * renderConfig.screenWidth
        points[:,7] = -renderConfig.ver_fov_adjust * camY / safeZ + 0.5 * renderConfig.screenHeight

    # pygame has y going down, hence the minus signs above
    points[:,8] = camZ

    return points

# same as above, for a single world position
# returns (x, y, depth)
def world_to_screen(position, cameraTransform):
    point = np.zeros((1, 9))
    point[0,3:6] = position
    project_points(point, cameraTransform)
    return point[0,6:9]

# figuring out whether a triangle is in front of the camera (return 0), behind (return 1), or both (return 2)
def triangle_state(points, triangle):
    state0 = points[triangle[0]][8] >= nearPlane
    state1 = points[triangle[1]][8] >= nearPlane
    state2 = points[triangle[2]][8] >= nearPlane

    if (state0 and state1 and state2):
        return 0 # all in front
    elif (not state0 and not state1 and not state2):
        return 1 # all behind
    else:
        return 2 # both

# the color a triangle ends up with after lighting
def shade_color(color, points, triangle, light_dir):
    if (renderConfig.renderingMode == "flat"):
        return color.astype('uint8')

    a = points[triangle[0],3:6]
    b = points[triangle[1],3:6]
    c = points[triangle[2],3:6]
    normal = m.normalize_3d(m.cross_3d(b - a, c - a))

    # two-sided lighting, so winding doesn't matter
    brightness = ambientLight + (1 - ambientLight) * np.abs(m.dot_3d(normal, light_dir))

    return np.minimum(color * brightness, 255).astype('uint8')

def draw_background(frame, skyColor):
    if (renderConfig.backgroundMode == "gradient"):
        # top of the screen is the sky color, bottom is half as bright
        fade = np.linspace(1.0, 0.5, renderConfig.screenHeight)
        frame[:,:] = (skyColor[np.newaxis,np.newaxis,:] * fade[np.newaxis,:,np.newaxis] * 255).astype('uint8')
    else:
        frame[:,:] = (skyColor * 255).astype('uint8')

    return frame

def draw_model(model, frame, z_buffer, cameraTransform, light_dir):
    points = model.points

    model.transform_points()
    project_points(points, cameraTransform)

    for triangle in model.triangles:
        # triangles that are even partially behind the camera are skipped, there's no clipping
        # (the camera never gets close enough to anything in the scene for this to matter)
        if (triangle_state(points, triangle) != 0):
            continue

        # (the points have their projected versions stored as indices 6,7,8)
        projpoints = np.ascontiguousarray(points[triangle][:,6:9])

        # the bounding box that the triangle occupies
        minX = int(np.floor(np.min(projpoints[:,0])))
        maxX = int(np.ceil(np.max(projpoints[:,0])))
        minY = int(np.floor(np.min(projpoints[:,1])))
        maxY = int(np.ceil(np.max(projpoints[:,1])))

        color = shade_color(model.color, points, triangle, light_dir)

        draw_triangle(renderConfig.screenWidth, renderConfig.screenHeight, frame, z_buffer, projpoints, minX, maxX, minY, maxY, color, renderConfig.backfaceCulling)

# the z buffer stores values of 1 / depth, so bigger means closer
@njit()
def draw_triangle(sW, sH, frame, z_buffer, proj_points, minX, maxX, minY, maxY, color, cullBack):
    x0 = proj_points[0][0]
    y0 = proj_points[0][1]
    x1 = proj_points[1][0]
    y1 = proj_points[1][1]
    x2 = proj_points[2][0]
    y2 = proj_points[2][1]

    # twice the signed area, the sign tells us which way the triangle is facing
    area = (x1 - x0) * (y2 - y0) - (y1 - y0) * (x2 - x0)
    if (area == 0):
        return
    if (cullBack and area < 0):
        return

    z0 = 1 / proj_points[0][2]
    z1 = 1 / proj_points[1][2]
    z2 = 1 / proj_points[2][2]

    # looping through every pixel in the bounding box that the triangle represents
    # we limit this box to the edges of the screen, because we don't care about anything else
    for y in range(max(minY, 0), min(maxY + 1, sH)):
        for x in range(max(minX, 0), min(maxX + 1, sW)):
            # barycentric weights, each is the area of the sub-triangle opposite a vertex
            w0 = ((x1 - x) * (y2 - y) - (y1 - y) * (x2 - x)) / area
            w1 = ((x2 - x) * (y0 - y) - (y2 - y) * (x0 - x)) / area
            w2 = 1 - w0 - w1

            if (w0 >= 0 and w1 >= 0 and w2 >= 0):
                z = w0*z0 + w1*z1 + w2*z2
                if (z > z_buffer[x, y]):
                    z_buffer[x, y] = z
                    frame[x, y, 0] = color[0]
                    frame[x, y, 1] = color[1]
                    frame[x, y, 2] = color[2]

# ********  text:       ********

# pygame fonts are expensive to make, so there's one per pixel size
fontCache = {}

def get_font(pixel_size):
    if (not pg.font.get_init()):
        pg.font.init()

    if (pixel_size not in fontCache):
        fontCache[pixel_size] = pg.font.Font(None, pixel_size)

    return fontCache[pixel_size]

# draws every label onto a surface (normally the display, after drawScreen())
# labels are scaled with the surface, so they stay sharp at the display resolution
def draw_text_labels(surface, labels, cameraTransform):
    scaleX = surface.get_width() / renderConfig.screenWidth
    scaleY = surface.get_height() / renderConfig.screenHeight

    drawn = 0
    for label in labels:
        if (not label.shouldBeDrawn or label.text == ""):
            continue

        screenPoint = world_to_screen(label.get_position(), cameraTransform)
        if (screenPoint[2] < nearPlane):
            continue

        pixelHeight = max(1, int(label.world_height() * pixels_per_unit(screenPoint[2]) * scaleY))

        textImage = get_font(pixelHeight).render(label.text, True, tuple(int(c) for c in label.color))
        topLeft = label.screen_anchor_point(textImage.get_width(), textImage.get_height(), screenPoint[0] * scaleX, screenPoint[1] * scaleY)

        surface.blit(textImage, (int(topLeft[0]), int(topLeft[1])))
        drawn += 1

    return drawn
