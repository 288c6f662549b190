"""datalead: static site generator for The Data Lead blog.

Articles are markdown/MDX files with a YAML header. Each one is wrapped in
the shared layout, navbar and footer and written as a static page. The
landing page adds a hero banner and the newest posts.

The main entry point is the CLI module, which builds and checks sites and
creates new articles.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
