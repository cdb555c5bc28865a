#!/usr/bin/env python3
"""FollowAlong entry point.

Run with:
    python main.py WORKOUT.json
    python -m followalong WORKOUT.json
"""

from followalong.__main__ import main


if __name__ == "__main__":
    main()
