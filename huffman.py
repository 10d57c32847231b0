from collections import Counter

from min_heap import MinPriorityQueue

SINGLE_SYMBOL_CODE = (0,) # code given to the only symbol of a one-symbol alphabet


class TreeNode: # Node for Huffman tree
    def __init__(self, symbol, frequency, left=None, right=None):
        self.symbol = symbol # input symbol for leaves, None for internal nodes
        self.frequency = frequency # leaf: input frequency, internal: sum of both children
        self.left = left
        self.right = right

    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf():
            return f"TreeNode({self.symbol!r}, {self.frequency})"
        return f"TreeNode(internal, {self.frequency})"


def _check_input(symbols, frequencies):
    if len(symbols) == 0:
        raise ValueError("at least one symbol is required")
    if len(symbols) != len(frequencies):
        raise ValueError(f"got {len(symbols)} symbols but {len(frequencies)} frequencies")
    if len(set(symbols)) != len(symbols):
        dupes = [s for s, count in Counter(symbols).items() if count > 1]
        raise ValueError(f"duplicate symbols: {dupes!r}")
    for symbol, frequency in zip(symbols, frequencies):
        if isinstance(frequency, bool) or not isinstance(frequency, int):
            raise ValueError(f"frequency of {symbol!r} must be an integer, got {frequency!r}")
        if frequency < 0:
            raise ValueError(f"frequency of {symbol!r} is negative: {frequency}")


def build_huffman_tree(symbols, frequencies): # symbols: distinct symbols, frequencies: matching non-negative counts
    symbols = list(symbols)
    frequencies = list(frequencies)
    _check_input(symbols, frequencies)

    # One leaf per symbol, heapified in a single pass
    leaves = [TreeNode(symbol, frequency) for symbol, frequency in zip(symbols, frequencies)]
    priority_queue = MinPriorityQueue.build_from_array(leaves)

    # Merge the two lightest nodes until one root is left
    while priority_queue.size > 1:
        left = priority_queue.extract_min()
        right = priority_queue.extract_min()
        merged_node = TreeNode(None, left.frequency + right.frequency, left, right)
        priority_queue.insert(merged_node)

    return priority_queue.extract_min() # root of the tree


def build_huffman_tree_from_table(frequency_table): # frequency_table: dict of symbol -> frequency
    return build_huffman_tree(list(frequency_table.keys()), list(frequency_table.values()))


def tree_height(node): # number of nodes on the longest root-to-leaf path
    if node is None:
        return 0
    return 1 + max(tree_height(node.left), tree_height(node.right))


def emit_codes(root):
    """
    Yields (symbol, bits) for every leaf in depth-first pre-order.
    A left edge contributes 0 and a right edge 1. A lone leaf gets SINGLE_SYMBOL_CODE.
    """
    if root.is_leaf():
        yield root.symbol, SINGLE_SYMBOL_CODE
        return

    # deepest leaf sits height-1 edges below the root
    max_depth = tree_height(root) - 1
    path = []

    def walk(node):
        if node.is_leaf():
            yield node.symbol, tuple(path)
            return
        if len(path) >= max_depth:
            raise RuntimeError("code path exceeds tree height")
        if node.left is not None:
            path.append(0)
            yield from walk(node.left)
            path.pop()
        if node.right is not None:
            path.append(1)
            yield from walk(node.right)
            path.pop()

    yield from walk(root)


def generate_huffman_codes(root): # root: root of the Huffman tree
    return {symbol: ''.join(str(bit) for bit in bits) for symbol, bits in emit_codes(root)}


def huffman_encode(symbols, code_map: dict) -> str: # symbols: iterable drawn from the alphabet, code_map: dict of symbol -> code
    return ''.join(code_map[symbol] for symbol in symbols)


def huffman_decode(bitstring: str, root) -> list: # bitstring: '0'/'1' characters, root: root of the Huffman tree
    decoded = []

    if root.is_leaf():
        for bit in bitstring:
            if bit != '0':
                raise ValueError(f"invalid bit {bit!r} for a single-symbol code")
            decoded.append(root.symbol)
        return decoded

    current_node = root
    for bit in bitstring:
        if bit == '0':
            current_node = current_node.left
        elif bit == '1':
            current_node = current_node.right
        else:
            raise ValueError(f"invalid bit {bit!r}")

        if current_node.is_leaf(): # reached a leaf
            decoded.append(current_node.symbol)
            current_node = root # reset to the root for the next symbol

    if current_node is not root:
        raise ValueError("bitstring ends in the middle of a code")
    return decoded


def weighted_path_length(code_map: dict, frequency_table: dict) -> int:
    return sum(frequency_table[symbol] * len(code) for symbol, code in code_map.items())


def is_prefix_free(codes) -> bool: # codes: iterable of code strings
    codes = list(codes)
    for i, a in enumerate(codes):
        for j, b in enumerate(codes):
            if i != j and b.startswith(a):
                return False
    return True
