"""
Block Directory Tests Module

Test suite for the block directory service.

Test Coverage:
- Catalog client request shaping and failure mapping
- Local installation index lookups
- Item normalization, asset URLs and relative dates
- Link building
- Search orchestration and the HTTP surface
"""
