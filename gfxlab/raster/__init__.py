"""Wireframe triangle rasterizer and its command-line front end."""