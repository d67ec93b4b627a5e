from .sitemap_generator import build_sitemap, write_sitemap
from .robots_generator import build_robots, write_robots
from .pipeline import GenerationReport, generate_seo_files

__all__ = [
    "build_sitemap",
    "write_sitemap",
    "build_robots",
    "write_robots",
    "GenerationReport",
    "generate_seo_files",
]
