"""
Convo Bot - slash-command chat bot with AI, video search and sports reports
"""

__version__ = "1.0.0"
