"""Whitted-style ray tracer with BVH acceleration, an OBJ loader and PPM output."""