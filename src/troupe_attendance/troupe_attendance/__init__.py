"""Troupe attendance package.

Organized by feature modules (members, stories, attendance, polls, exports, ...)
with a thin Flask controller layer over service/repository layers.
"""
