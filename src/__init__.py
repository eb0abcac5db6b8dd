"""Image Gateway Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Serverless image gateway storing images as GridFS-style chunks in MongoDB"
)

__all__ = ["handlers", "core"]
