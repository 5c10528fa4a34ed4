"""Value and name transforms: units, colors, glob rename rules, names, directives."""
