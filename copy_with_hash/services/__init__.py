"""Engine services: resolving, fingerprinting, publishing and the manifest."""
