"""
Infrastructure Layer
- Purpose: Provide concrete implementations of external concerns
- Key Directories:
    - inference: pose estimators
    - vision: frame sources and drawing surfaces
"""
