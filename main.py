import argparse
import logging
import math

import pygame as pg
from dot3d_scripts import dot3d as engine
from dot3d_scripts.dot3d_logging import setup_default_logging
from dot3d_scripts.dot3d_tutorial import DotProductTutorial

logger = logging.getLogger("main")

logLevels = ["DEBUG", "INFO", "WARNING", "ERROR"]

# This script opens a window and plays the dot product tutorial until the window is closed (or escape is pressed).

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Shows what the dot product of two directions tells you, using moving and turning spheres.")
    parser.add_argument("--speed", type=float, default=1.0, help="animation speed, from 1 to 2 (default: 1)")
    parser.add_argument("--width", type=int, default=400, help="render width in pixels (default: 400)")
    parser.add_argument("--height", type=int, default=300, help="render height in pixels (default: 300)")
    parser.add_argument("--scale", type=int, default=2, help="the window is the render size times this (default: 2)")
    parser.add_argument("--fullscreen", action="store_true", help="open the window in fullscreen")
    parser.add_argument("--backface-culling", action="store_true", help="skip triangles facing away from the camera")
    parser.add_argument("--perpendicular-tolerance", type=float, default=1e-3,
                        help="dot products closer to 0 than this count as perpendicular (default: 0.001)")
    parser.add_argument("--frames", type=int, default=0, help="quit after this many frames, 0 runs until closed (default: 0)")
    parser.add_argument("--log-level", type=str.upper, choices=logLevels, default="INFO", help="logging level (default: INFO)")

    args = parser.parse_args(argv)

    if (args.width <= 0 or args.height <= 0 or args.scale <= 0):
        parser.error("--width, --height and --scale have to be positive")
    # float() happily parses "nan" and "inf"
    if (not math.isfinite(args.speed)):
        parser.error("--speed has to be a finite number")
    if (not math.isfinite(args.perpendicular_tolerance) or args.perpendicular_tolerance < 0):
        parser.error("--perpendicular-tolerance has to be a finite number, 0 or more")
    if (args.frames < 0):
        parser.error("--frames can't be negative")

    return args

def main(argv=None):
    args = parse_args(argv)
    setup_default_logging(args.log_level)

    # Always start the engine first. Pass in the render resolution, screen resolution, and VERTICAL fov.
    engine.init(args.width, args.height, args.width * args.scale, args.height * args.scale, 60, args.fullscreen)

    # the same blue unity cameras clear to
    engine.setBackGroundColor(49, 77, 121)
    if (args.backface_culling):
        engine.enableBackfaceCulling()

    tutorial = DotProductTutorial(args.speed, args.perpendicular_tolerance)
    tutorial.awake()

    frameCount = 0
    running = True
    while running:
        # handle main events (quit, basically)
        for event in pg.event.get():
            if event.type == pg.QUIT: running = False
            if event.type == pg.KEYDOWN and event.key == pg.K_ESCAPE: running = False

        # the clock has to tick BEFORE anything moves
        dt = engine.update()
        tutorial.update(dt)

        frame = engine.getFrame()
        engine.drawScreen(frame)
        engine.drawLabels()
        engine.update_display()

        frameCount += 1
        if (args.frames > 0 and frameCount >= args.frames):
            running = False

    logger.info("quitting after %d frames (last results: %.3f, %.3f)", frameCount, tutorial.firstDotProduct, tutorial.secondDotProduct)
    engine.quit()

    return tutorial

if __name__ == "__main__":
    main()
