"""Small utilities shared by Tipline packages."""
