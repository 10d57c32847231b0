import itertools
import random
from fractions import Fraction

import pytest

import huffman as huff


SYMBOLS = ['a', 'b', 'c', 'd', 'e', 'f']
FREQS = [5, 9, 12, 13, 16, 45]


def _codes(symbols, freqs):
    return huff.generate_huffman_codes(huff.build_huffman_tree(symbols, freqs))


def _brute_force_optimal_cost(freqs):
    # a complete prefix code exists for lengths l_i iff sum 2^-l_i == 1
    n = len(freqs)
    if n == 1:
        return freqs[0]
    best = None
    for lengths in itertools.product(range(1, n), repeat=n):
        if sum(Fraction(1, 2 ** l) for l in lengths) != 1:
            continue
        cost = sum(f * l for f, l in zip(freqs, lengths))
        if best is None or cost < best:
            best = cost
    return best


def test_classic_example_codes():
    codes = _codes(SYMBOLS, FREQS)
    assert codes == {
        'f': '0',
        'c': '100',
        'd': '101',
        'a': '1100',
        'b': '1101',
        'e': '111',
    }
    # traversal order, not input order
    assert list(codes) == ['f', 'c', 'd', 'a', 'b', 'e']


def test_classic_example_lengths_follow_frequency():
    codes = _codes(SYMBOLS, FREQS)
    assert len(codes['f']) == 1
    assert len(codes['a']) == len(codes['b']) == max(len(c) for c in codes.values())
    assert codes['a'][:-1] == codes['b'][:-1]
    assert codes['a'][-1] != codes['b'][-1]

    by_freq = sorted(zip(FREQS, SYMBOLS))
    lengths = [len(codes[s]) for _, s in by_freq]
    assert all(a >= b for a, b in zip(lengths, lengths[1:]))


def test_root_and_node_invariants():
    root = huff.build_huffman_tree(SYMBOLS, FREQS)
    assert root.frequency == sum(FREQS)
    assert root.symbol is None

    stack = [root]
    leaves = 0
    while stack:
        node = stack.pop()
        if node.is_leaf():
            leaves += 1
            continue
        assert node.left is not None and node.right is not None
        assert node.frequency == node.left.frequency + node.right.frequency
        stack.extend((node.left, node.right))
    assert leaves == len(SYMBOLS)


def test_tree_height():
    root = huff.build_huffman_tree(SYMBOLS, FREQS)
    assert huff.tree_height(root) == 5
    assert huff.tree_height(None) == 0
    assert huff.tree_height(huff.TreeNode('x', 1)) == 1


def test_emit_codes_yields_bit_tuples():
    root = huff.build_huffman_tree(SYMBOLS, FREQS)
    emitted = list(huff.emit_codes(root))
    assert emitted[0] == ('f', (0,))
    assert ('e', (1, 1, 1)) in emitted
    assert len(emitted) == len(SYMBOLS)


def test_single_symbol_gets_one_bit_code():
    root = huff.build_huffman_tree(['z'], [7])
    assert root.is_leaf()
    assert list(huff.emit_codes(root)) == [('z', (0,))]
    codes = huff.generate_huffman_codes(root)
    assert codes == {'z': '0'}

    bits = huff.huffman_encode('zzz', codes)
    assert bits == '000'
    assert huff.huffman_decode(bits, root) == ['z', 'z', 'z']
    with pytest.raises(ValueError):
        huff.huffman_decode('01', root)


def test_two_symbols():
    codes = _codes(['x', 'y'], [1, 1])
    assert sorted(codes.values()) == ['0', '1']


def test_zero_frequencies_still_get_codes():
    codes = _codes(['a', 'b', 'c'], [0, 0, 0])
    assert len(codes) == 3
    assert huff.is_prefix_free(codes.values())


@pytest.mark.parametrize("seed", range(20))
def test_random_alphabets_prefix_free_and_optimal(seed):
    rng = random.Random(seed)
    n = rng.randint(1, 6)
    symbols = [chr(ord('a') + i) for i in range(n)]
    freqs = [rng.randint(0, 30) for _ in range(n)]

    codes = _codes(symbols, freqs)
    assert set(codes) == set(symbols)
    assert huff.is_prefix_free(codes.values())

    cost = huff.weighted_path_length(codes, dict(zip(symbols, freqs)))
    assert cost == _brute_force_optimal_cost(freqs)


def test_reordering_equal_frequencies_keeps_length_multiset():
    freqs = [4, 4, 4, 4, 2, 2]
    symbols = list("abcdef")
    a = _codes(symbols, freqs)
    b = _codes(list(reversed(symbols)), list(reversed(freqs)))
    assert sorted(len(c) for c in a.values()) == sorted(len(c) for c in b.values())


def test_deterministic_for_fixed_input():
    assert _codes(SYMBOLS, FREQS) == _codes(SYMBOLS, FREQS)


def test_round_trip():
    rng = random.Random(3)
    root = huff.build_huffman_tree(SYMBOLS, FREQS)
    codes = huff.generate_huffman_codes(root)
    message = [rng.choice(SYMBOLS) for _ in range(500)]

    bits = huff.huffman_encode(message, codes)
    assert huff.huffman_decode(bits, root) == message
    assert huff.huffman_decode('', root) == []


def test_decode_rejects_bad_input():
    root = huff.build_huffman_tree(SYMBOLS, FREQS)
    with pytest.raises(ValueError):
        huff.huffman_decode('2', root)
    with pytest.raises(ValueError):
        huff.huffman_decode('11', root)  # stops inside a code


def test_encode_unknown_symbol_raises():
    codes = _codes(SYMBOLS, FREQS)
    with pytest.raises(KeyError):
        huff.huffman_encode('abz', codes)


def test_build_from_table_matches_parallel_lists():
    table = dict(zip(SYMBOLS, FREQS))
    root = huff.build_huffman_tree_from_table(table)
    assert huff.generate_huffman_codes(root) == _codes(SYMBOLS, FREQS)


@pytest.mark.parametrize("symbols, freqs", [
    ([], []),
    (['a', 'b'], [1]),
    (['a', 'a'], [1, 2]),
    (['a', 'b'], [1, -1]),
    (['a', 'b'], [1, 2.5]),
])
def test_invalid_input_rejected(symbols, freqs):
    with pytest.raises(ValueError):
        huff.build_huffman_tree(symbols, freqs)


def test_is_prefix_free():
    assert huff.is_prefix_free(['0', '10', '11'])
    assert not huff.is_prefix_free(['0', '01', '11'])
