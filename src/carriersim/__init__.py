"""
carriersim: congestion-driven rewiring of a 3D carrier network

Animates a population of carriers hopping across a fixed 3D graph.

Core concepts:
- Carriers hop between neighboring nodes at random
- Every hop adds traffic to the link being entered
- A link whose hop count reaches the break threshold fails
- Both endpoints of a failed link are rewired to random nodes
- The whole network rotates slowly, or with the pointer while dragging
"""

__version__ = "0.1.0"
