"""Motion API — adventure planning backend on Supabase and the Motion AI service."""

__version__ = "1.0.0"
