# -*- coding: utf-8 -*-
"""Local daily calorie tracker: JSON HTTP API over a single JSON file, plus a static front end."""
