"""
engine
Turn orchestration: config, turn flow, session loop, run logs.
"""
