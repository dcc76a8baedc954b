"""Integration seams with real and fake implementations."""
