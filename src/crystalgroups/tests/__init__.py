"""
Operations of a selection of line, plane and space groups in their
conventional (Bilbao) setting, identity first, used throughout the tests.
"""

SG2_OPERATIONS = ("x,y,z", "-x,-y,-z")

SG4_OPERATIONS = ("x,y,z", "-x,y+1/2,-z")

SG14_OPERATIONS = ("x,y,z", "-x,y+1/2,-z+1/2", "-x,-y,-z", "x,-y+1/2,z+1/2")

SG47_OPERATIONS = (
    "x,y,z",
    "-x,-y,z",
    "-x,y,-z",
    "x,-y,-z",
    "-x,-y,-z",
    "x,y,-z",
    "x,-y,z",
    "-x,y,z",
)

SG80_OPERATIONS = ("x,y,z", "-x+1/2,-y+1/2,z+1/2", "-y,x+1/2,z+1/4", "y+1/2,-x,z+3/4")

SG123_OPERATIONS = (
    "x,y,z",
    "-x,-y,z",
    "-y,x,z",
    "y,-x,z",
    "-x,y,-z",
    "x,-y,-z",
    "y,x,-z",
    "-y,-x,-z",
    "-x,-y,-z",
    "x,y,-z",
    "y,-x,-z",
    "-y,x,-z",
    "x,-y,z",
    "-x,y,z",
    "-y,-x,z",
    "y,x,z",
)

SG168_OPERATIONS = ("x,y,z", "-y,x-y,z", "-x+y,-x,z", "-x,-y,z", "y,-x+y,z", "x-y,x,z")

PLANE_GROUP9_OPERATIONS = ("x,y", "-x,-y", "-x,y", "x,-y")
