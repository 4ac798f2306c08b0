import argparse
import multiprocessing as mp
import sys
import time

import numpy as np
from numba import njit

from camera import Camera
from demo_scene import build_demo_scene
from framebuffer import Framebuffer, ImageWriteError, to_rgba8
from ray import Ray
from render_settings import RenderSettings
from scene import SceneNotFrozenError
from surfaces.sphere import intersect_sphere
from vector import dot, normalize, reflect


# Offset along a reflected ray to avoid hitting the surface it leaves
REFLECTION_OFFSET = 1e-4


# =============================================================================
# Intersection
# =============================================================================

@njit(cache=True)
def _find_nearest_sphere_jit(origin, direction, centers, radii):
    """
    Linear scan over all spheres for the nearest hit (JIT-compiled).

    Returns (sphere index, distance), or (-1, inf) when nothing is hit.
    Ties keep the earlier sphere.
    """
    best_t = np.inf
    best_idx = -1
    for idx in range(radii.shape[0]):
        t = intersect_sphere(origin, direction, centers[idx], radii[idx])
        if t < best_t:
            best_t = t
            best_idx = idx
    return best_idx, best_t


def find_nearest_intersection(ray, scene):
    """
    Find the nearest sphere along the ray.

    Returns:
        (sphere, t) if intersection found
        (None, None) if no intersection
    """
    if not scene.frozen:
        raise SceneNotFrozenError("Scene must be frozen before tracing; call scene.freeze() first")
    idx, t = _find_nearest_sphere_jit(ray.origin, ray.direction,
                                      scene.sphere_centers, scene.sphere_radii)
    if idx < 0:
        return None, None
    return scene.spheres[idx], float(t)


# =============================================================================
# Shading
# =============================================================================

def compute_color(ray, hit_point, sphere, scene, settings, depth):
    """
    Color at a hit point: diffuse and specular from every light, plus mirror
    reflection while depth < settings.max_depth.

    Lights are always treated as visible; there is no shadow test.
    """
    material = sphere.material
    normal = sphere.normal(hit_point)

    # The background doubles as a constant ambient floor
    color = np.array(settings.background_color, dtype=np.float64)

    for light in scene.lights:
        light_dir = normalize(light.position - hit_point)
        n_dot_l = dot(light_dir, normal)

        if n_dot_l > 0:
            color += light.color * material.color * (n_dot_l * material.diffuse)

        # Reflection of the light direction about the normal, compared with
        # the direction back towards the viewer: -dot(D, R) == dot(D, L - 2(L.N)N)
        reflect_dir = normal * (2.0 * n_dot_l) - light_dir
        r_dot_v = -dot(ray.direction, reflect_dir)
        if r_dot_v > 0:
            r_dot_v *= r_dot_v
            r_dot_v *= r_dot_v
            r_dot_v *= r_dot_v
            color += light.color * (r_dot_v * material.specular)

    if material.reflective > 0 and depth < settings.max_depth:
        reflect_ray_dir = reflect(ray.direction, normal)
        reflect_origin = hit_point + reflect_ray_dir * REFLECTION_OFFSET
        reflected = trace_ray(Ray(reflect_origin, reflect_ray_dir), scene, settings, depth + 1)
        color += reflected * material.color * material.reflective

    return color


def trace_ray(ray, scene, settings, depth=0):
    """
    Trace a ray through the scene and return the color.
    """
    sphere, t = find_nearest_intersection(ray, scene)

    if sphere is None:
        return np.array(settings.background_color, dtype=np.float64)

    hit_point = ray.at(t)
    return compute_color(ray, hit_point, sphere, scene, settings, depth)


# =============================================================================
# Scheduling
# =============================================================================

def stripe_rows(worker_id, num_workers, height):
    """Rows owned by one worker: worker_id, worker_id + num_workers, ..."""
    return range(worker_id, height, num_workers)


def render_stripe(framebuffer, worker_id, num_workers, camera, scene, settings):
    """
    Render every pixel of one stripe into the framebuffer.

    A pixel whose computation raises is painted with the background color and
    reported; the rest of the stripe still renders.

    Returns:
        list of (x, y) pixels that faulted
    """
    width = framebuffer.width
    height = framebuffer.height
    background = to_rgba8(settings.background_color)
    faults = []

    for y in stripe_rows(worker_id, num_workers, height):
        for x in range(width):
            try:
                ray = camera.generate_ray(x, y, width, height)
                rgba = to_rgba8(trace_ray(ray, scene, settings))
            except Exception as e:
                print(f"Worker {worker_id}: pixel ({x}, {y}) failed: {e!r}", file=sys.stderr)
                faults.append((x, y))
                rgba = background
            framebuffer.put_pixel(x, y, rgba)

    return faults


# Per-process state, set by the pool initializer
_worker_state = {}


def _init_worker(shared_pixels, camera, scene, settings):
    """Attach a worker process to the shared framebuffer and the scene."""
    _worker_state['framebuffer'] = Framebuffer(settings.width, settings.height,
                                               buffer=shared_pixels, fill_alpha=False)
    _worker_state['camera'] = camera
    _worker_state['scene'] = scene
    _worker_state['settings'] = settings


def _render_stripe_worker(worker_id):
    """
    Worker function to render one stripe.
    Called by multiprocessing pool.
    """
    settings = _worker_state['settings']
    start = time.time()
    faults = render_stripe(_worker_state['framebuffer'], worker_id, settings.workers,
                           _worker_state['camera'], _worker_state['scene'], settings)
    print(f"Worker {worker_id} finished its stripe in {time.time() - start:.2f}s")
    sys.stdout.flush()
    return faults


def render_sequential(camera, scene, settings):
    """Render all stripes one after another in this process."""
    framebuffer = Framebuffer(settings.width, settings.height)
    faults = []
    for worker_id in range(settings.workers):
        faults.extend(render_stripe(framebuffer, worker_id, settings.workers,
                                    camera, scene, settings))
    return framebuffer, faults


def render_parallel(camera, scene, settings):
    """
    Render the scene with one process per stripe.

    Workers write straight into a shared framebuffer; stripes never overlap,
    so no pixel needs a lock. The pool map is the barrier: the image is only
    handed back once every stripe is done.
    """
    width, height = settings.width, settings.height
    shared_pixels = mp.RawArray('B', width * height * 4)
    shared = Framebuffer(width, height, buffer=shared_pixels)

    with mp.Pool(settings.workers, initializer=_init_worker,
                 initargs=(shared_pixels, camera, scene, settings)) as pool:
        results = pool.map(_render_stripe_worker, range(settings.workers))

    faults = [pixel for stripe_faults in results for pixel in stripe_faults]
    return shared.copy(), faults


def render(camera, scene, settings):
    """
    Render the scene into a new framebuffer.

    Freezes the scene first. With a single worker everything runs in this
    process; otherwise each stripe gets its own worker process. The result is
    pixel-identical for any worker count.

    Returns:
        (framebuffer, faults) where faults lists the (x, y) pixels that failed
    """
    scene.freeze()

    start_time = time.time()
    print(f"Rendering {settings.width}x{settings.height} with {settings.workers} worker(s), "
          f"{len(scene.spheres)} spheres, {len(scene.lights)} lights, max depth {settings.max_depth}")

    if settings.workers == 1:
        framebuffer, faults = render_sequential(camera, scene, settings)
    else:
        framebuffer, faults = render_parallel(camera, scene, settings)

    print(f"Rendering complete in {time.time() - start_time:.1f}s")
    if faults:
        print(f"Warning: {len(faults)} pixel(s) failed and were filled with the background color",
              file=sys.stderr)

    return framebuffer, faults


# =============================================================================
# Entry point
# =============================================================================

def parse_args(argv=None):
    defaults = RenderSettings()
    parser = argparse.ArgumentParser(description='Sphere ray tracer')
    parser.add_argument('output_image', type=str, nargs='?', default=defaults.output_path,
                        help='Name of the output image file')
    parser.add_argument('--width', type=int, default=None,
                        help=f'Image width (default: {defaults.width})')
    parser.add_argument('--height', type=int, default=None,
                        help=f'Image height (default: {defaults.height})')
    parser.add_argument('--workers', type=int, default=None,
                        help=f'Number of worker processes (default: {defaults.workers})')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        settings = RenderSettings().with_overrides(width=args.width, height=args.height,
                                                   workers=args.workers,
                                                   output_path=args.output_image)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print("Simple sphere ray tracer")
    print("Creating scene...")
    scene = build_demo_scene(settings)
    camera = Camera()
    print(f"Scene created: {len(scene.spheres)} spheres, {len(scene.lights)} lights")

    print("Rendering...")
    framebuffer, faults = render(camera, scene, settings)

    print(f"Writing {settings.output_path} image...")
    try:
        framebuffer.save(settings.output_path)
    except ImageWriteError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
