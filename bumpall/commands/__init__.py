"""Click commands registered on the bumpall CLI group."""
