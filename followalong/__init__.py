"""FollowAlong: hands-free boxing and kettlebell round timer."""

__version__ = "0.1.0"
