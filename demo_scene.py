import math

from material import Material
from scene import Scene


MIRROR = Material(color=(0.6, 0.6, 0.6), diffuse=0.2, specular=0.3, reflective=0.8)
GREEN = Material(color=(0.1, 1.0, 0.1), diffuse=0.3, specular=0.1, reflective=0.4)
RED = Material(color=(1.0, 0.1, 0.1), diffuse=0.3, specular=0.1, reflective=0.4)

# One sphere per character: 'g' green, 'r' red, '.' mirror
SPHERE_MAP = (
    ".........",
    ".ggg.....",
    ".g...rrr.",
    ".g.g.r.r.",
    ".ggg.rrr.",
    ".........",
)

SPHERE_RADIUS = 0.25
SPHERE_SPACING = 0.5


def build_demo_scene(settings):
    """
    Build the demo scene: a grid of small spheres spelling two letters in
    colored spheres in front of a wavy wall of mirrors, lit by one light.
    """
    scene = Scene(settings)

    for j, row in enumerate(SPHERE_MAP):
        for i, cell in enumerate(row):
            if cell == 'g':
                material, z = GREEN, 1.5
            elif cell == 'r':
                material, z = RED, 1.5
            else:
                material, z = MIRROR, 2.0 + math.sin(i + j) * 0.8

            position = (-2.0 + i * SPHERE_SPACING, 1.25 - j * SPHERE_SPACING, z)
            scene.add_sphere(position, SPHERE_RADIUS, material)

    scene.add_light((0.0, 0.0, 0.0), (2.0, 2.0, 2.0))
    return scene
