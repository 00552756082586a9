"""LectureDeck - study sessions over analyzed lecture material"""

__version__ = "1.0.0"
