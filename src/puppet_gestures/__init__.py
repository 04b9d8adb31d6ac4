"""
Puppet Gesture Show

A Python service that reads webcam frames, detects hand landmarks using MediaPipe,
recognizes shadow-puppet gestures and shows the matching puppet, playing its
animation once the gesture has been held.
"""

__version__ = "0.1.0"
