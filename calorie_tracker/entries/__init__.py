# -*- coding: utf-8 -*-
"""Entries domain: food entries keyed by UTC calendar day.

- models: pydantic shapes of an entry and the persisted snapshot
- validation: checks for entry-creation payloads
- repository: in-memory operations over a loaded collection
- storage: the JSON file that owns the collection on disk
- api: HTTP routes under /api
"""
