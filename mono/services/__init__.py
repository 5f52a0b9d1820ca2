"""Application services for the mono CLI.

Services implement the release logic, coordinating between the core types
(core/) and filesystem access (platform/).
"""
