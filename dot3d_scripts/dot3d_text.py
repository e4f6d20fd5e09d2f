import numpy as np
from .dot3d_model import Model
from . import dot3d_model

# where the text sits relative to its position
anchors = ["middle center", "middle left"]

# a text label is a normal scene object (it has a transform, a parent, etc.) with no mesh
# it gets drawn in screen space, at wherever its world position ends up on the screen
class TextLabel(Model):
    def __init__(self, name, text, tags, color, font_size, anchor):
        super().__init__(name, dot3d_model.empty_points(), dot3d_model.empty_triangles(), tags, color)

        self.add_tag("text")

        self.text = text

        # font size and scale work together, so a large font at a small scale is still a small label
        self.fontSize = font_size

        # anything that isn't a known anchor is treated as centered
        if (anchor not in anchors):
            anchor = "middle center"
        self.anchor = anchor

    def set_text(self, text):
        self.text = text

    # how tall the text is in world units (a 500 font at 0.01 scale is half a unit)
    def world_height(self):
        return self.fontSize * self.worldTransform.scale[1] * 0.1

    def screen_anchor_point(self, rect_width, rect_height, x, y):
        if (self.anchor == "middle left"):
            return np.asarray([x, y - rect_height / 2])
        return np.asarray([x - rect_width / 2, y - rect_height / 2])
