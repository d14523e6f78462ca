# tree-sitter is fed UTF-16LE so its byte offsets are Qt character positions * 2
ENC = "utf-16-le"

# SelectionManager source used for the highlight left behind by a tree jump
JUMP_SELECTION = "tree_debug_jump"
