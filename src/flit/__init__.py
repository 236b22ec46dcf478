"""
Flit - fantasy stock leagues and learning portfolios.

Domain logic for leagues, drafts, matchups, trades and waivers, the learning
portfolio engine, a service layer for the REST backend and a mock backend for
local development.
"""

__version__ = "0.1.0"
