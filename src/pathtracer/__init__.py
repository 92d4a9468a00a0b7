"""CPU path tracer for sphere scenes.

This package renders scenes of spheres with diffuse, metal and glass
materials by Monte Carlo path tracing, with support for:
- Recursive radiance estimation against a sky gradient
- One unified material model (diffuse, fuzzy metal, dielectric)
- Signed sphere radii for hollow glass shells
- Thin-lens camera with depth of field
- Multi-threaded scanline rendering with deterministic, ordered output

Subpackages:
    core: Vector utilities, integrator, settings and the parallel renderer
    geometry: Sphere primitive and hit records
    materials: Material record and scattering
    scene: Scene container, closest-hit queries and demo scenes
    camera: Camera model with ray generation
    output: PPM writer and PNG export
"""

__version__ = "0.1.0"
