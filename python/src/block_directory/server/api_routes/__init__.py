from .block_directory_api import router as block_directory_router

__all__ = ["block_directory_router"]
