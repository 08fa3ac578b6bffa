"""Command plugins for the Convo Bot"""
