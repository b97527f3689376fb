"""
FastAPI Routes.

등록 순서 중요: process → drive (drive의 /{path}가 나머지 전부를 받음)
"""

from . import drive, process

__all__ = ["drive", "process"]
