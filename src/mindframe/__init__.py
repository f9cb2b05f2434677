"""MindFrame audio pipeline.

Mixes a synthesized affirmation voice track with a scenario-specific
binaural-beat background. Mixing is best-effort: any failure returns
the original voice audio.
"""

__version__ = "0.1.0"
