from __future__ import annotations

"""
Domain Constants for Makefile Generation.

Centralizes the reserved filenames, make variable names, rule names and
file extensions shared by the directory model, the targets and the
shared definitions file.
"""

from typing import Tuple

# -----------------------------------------------------------------------------
# RESERVED FILENAMES
# -----------------------------------------------------------------------------

MAKEFILE_NAME = "Makefile"
COMMON_NAME = "common.mk"
INCLUDE_NAME = "include"

# -----------------------------------------------------------------------------
# MAKE VARIABLES
# -----------------------------------------------------------------------------

# Shell commands
CC_VAR = "CC"
CXX_VAR = "CXX"
AR_VAR = "AR"
RM_VAR = "RM"
MAKE_VAR = "MAKE"
GIT_CLONE_VAR = "GIT_CMD"

# Command flags
AR_FLAGS_VAR = "AR_FLAGS"
RM_FLAGS_VAR = "RM_FLAGS"
STATIC_CPPFLAGS_VAR = "_CPPFLAGS"
CPPFLAGS_VAR = "CPPFLAGS"
INCLUDE_VAR = "INCLUDE"

# Per-directory lists
SUBDIRS_VAR = "SUBDIRS"
OBJECTS_VAR = "OBJS"
TARGETS_VAR = "TARGETS"

# -----------------------------------------------------------------------------
# RULES AND SYNTAX
# -----------------------------------------------------------------------------

ALL_RULE = "all"
CLEAN_RULE = "clean"
PHONY_RULE = ".PHONY"
INCLUDE_DIRECTIVE = "include"
MAKE_SWITCH_FLAG = "-C"
INCLUDE_FLAG = "-I"
OUTPUT_FLAG = "-o"
COPY_CMD = "cp"

# Automatic variables: the rule output and all of its prerequisites
OUT_IN_VARS = "$@ $^"

PARENT_SEGMENT = "../"
LOCAL_DIR = "."

# -----------------------------------------------------------------------------
# FILE EXTENSIONS
# -----------------------------------------------------------------------------

ARCHIVE_EXT = ".a"
OBJECT_EXT = ".o"
C_EXT = ".c"
CPP_EXTS: Tuple[str, ...] = (".cpp", ".cxx", ".c++")
SOURCE_EXTS: Tuple[str, ...] = (C_EXT,) + CPP_EXTS
