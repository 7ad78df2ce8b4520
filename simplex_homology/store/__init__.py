from .simplex_tree import SimplexTree, SimplexTreeNode
