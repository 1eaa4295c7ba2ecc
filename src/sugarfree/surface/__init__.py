"""Surface language: the tree produced by the parser, before desugaring."""
