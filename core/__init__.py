"""
core
Simulation domain for Echoes of Tomorrow (UI/IO independent).
"""
