"""Monte Carlo path tracer for scenes made of spheres.

This package renders a scene of spheres into an RGB image by stochastically
simulating light transport, with support for:
- Lambertian, metal and dielectric materials
- Antialiasing jitter and thin-lens depth of field
- Parallel per-row rendering with independent random generators
- PPM (P3) and PNG output with a configurable gamma policy

Subpackages:
    core: Ray and vector utilities, the path tracing integrator, renderer and image
    geometry: Hit records and the sphere primitive
    materials: Scattering models (Lambertian, metal, dielectric)
    scene: Scene aggregate, scene manager and preset scenes
    camera: Thin-lens camera with ray generation
    preview: Image export and display utilities
"""

__version__ = "0.1.0"
