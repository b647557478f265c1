# src/hatetris/game/__init__.py
