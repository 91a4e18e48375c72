"""Write a blog as Markdown posts and publish them as GitHub Gists."""

__version__ = "0.1.0"