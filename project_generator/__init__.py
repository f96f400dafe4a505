"""
Project Generator - turns a project description into a scaffolded, agent-ready project.
"""

__version__ = "1.0.0"
