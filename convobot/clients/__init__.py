"""HTTP clients for the external APIs used by the Convo Bot"""
