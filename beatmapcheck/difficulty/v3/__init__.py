"""Current difficulty files (version 3.x), with short keys and separate
collections for color notes, bombs, arcs and chains"""
