"""
Huffman code table driver and experiments

Prints the Huffman code of every symbol in a fixed alphabet, and optionally runs
experiments measuring how close the derived codes get to the source entropy
across synthetic byte distributions

Outputs of --experiments (in --outdir):
  - metrics.csv     (raw row per run per dataset)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py
  python experiments.py --symbols xyz --freqs 3,1,1
  python experiments.py --experiments --outdir results --runs 5
  python experiments.py --experiments --runs 3 --size_kb 64 --generators uniform256,zipf128
"""

from __future__ import annotations

import argparse
import csv
import math
import random
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple, Callable, Sequence

import matplotlib.pyplot as plt

import huffman as huff


DEFAULT_SYMBOLS = ['a', 'b', 'c', 'd', 'e', 'f']
DEFAULT_FREQUENCIES = [5, 9, 12, 13, 16, 45]


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def freq_table(data: bytes) -> Dict[int, int]:
    ft: Dict[int, int] = {}
    for b in data:
        ft[b] = ft.get(b, 0) + 1
    return ft

def shannon_entropy(ft: Dict[int, int]) -> float:
    total = sum(ft.values())
    if total == 0:
        return 0.0
    return -sum((f / total) * math.log2(f / total) for f in ft.values() if f > 0)


# Code table output

def format_code(bits: str) -> str:
    return " ".join(bits)

def print_codes(code_map: Dict[object, str]) -> None:
    for symbol, bits in code_map.items():
        print(f"{symbol} -> {format_code(bits)}")

def get_huffman_codes(symbols: Sequence, frequencies: Sequence[int]) -> Dict[object, str]:
    """
    Builds the Huffman tree for the alphabet and prints one line per symbol,
    in tree traversal order
    """
    root = huff.build_huffman_tree(symbols, frequencies)
    code_map = huff.generate_huffman_codes(root)
    print_codes(code_map)
    return code_map


# Synthetic dataset generators

def gen_uniform(size: int, alphabet: int = 256, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(0, alphabet) for _ in range(size))

def gen_repetitive(size: int, dominant: int = ord('A'), dom_frac: float = 0.90, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    other_symbols = [i for i in range(256) if i != dominant]
    out = bytearray()
    for _ in range(size):
        if rng.random() < dom_frac:
            out.append(dominant)
        else:
            out.append(rng.choice(other_symbols))
    return bytes(out)

def _sample_by_weight(rng: random.Random, weights: List[float], size: int) -> List[int]:
    total = sum(weights)
    cdf = []
    acc = 0.0
    for w in weights:
        acc += w / total
        cdf.append(acc)

    picks = []
    for _ in range(size):
        r = rng.random()
        lo, hi = 0, len(cdf) - 1
        while lo < hi:
            mid = (lo + hi) // 2
            if r <= cdf[mid]:
                hi = mid
            else:
                lo = mid + 1
        picks.append(lo)
    return picks

def gen_zipf_like(size: int, alphabet: int = 128, s: float = 1.2, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    weights = [1.0 / ((i + 1) ** s) for i in range(alphabet)]
    return bytes(_sample_by_weight(rng, weights, size))

def gen_english_like(size: int, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    chars = (
        " etaoinshrdlcumwfgypbvkjxq"
        "ETAOINSHRDLCUMWFGYPBVKJXQ"
        "\n"
    )
    weights = []
    for ch in chars:
        if ch == ' ':
            weights.append(13.0)
        elif ch == '\n':
            weights.append(1.5)
        elif ch.lower() in "etaoinshrdlu":
            weights.append(6.0)
        elif ch.lower() in "cmfwgypbvk":
            weights.append(2.5)
        else:
            weights.append(1.2)
    return bytes(ord(chars[i]) for i in _sample_by_weight(rng, weights, size))

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], bytes]] = {
    "uniform256": lambda size, seed: gen_uniform(size, alphabet=256, seed=seed),
    "uniform128": lambda size, seed: gen_uniform(size, alphabet=128, seed=seed),
    "zipf128": lambda size, seed: gen_zipf_like(size, alphabet=128, s=1.2, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
}

def generate_dataset(name: str, size_bytes: int, seed: int) -> Tuple[str, bytes]:
    """
    Unknown dataset names fall back to uniform256, with the fallback
    recorded in the returned name
    """
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        return f"{name}_fallback_uniform256", gen_uniform(size_bytes, alphabet=256, seed=seed)
    return name, fn(size_bytes, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    file_size_bytes: int
    run_id: int
    unique_symbols: int
    tree_height: int

    build_tree_ms: float
    emit_codes_ms: float

    weighted_path_length: int
    avg_code_length: float
    entropy_bits: float
    efficiency: float  # entropy / avg code length

    prefix_free_ok: int  # 1 or 0
    roundtrip_ok: int  # 1 or 0


def run_one(data: bytes) -> MetricRow:
    ft = freq_table(data)

    t0 = now_ns()
    root = huff.build_huffman_tree_from_table(ft)
    t1 = now_ns()
    code_map = huff.generate_huffman_codes(root)
    t2 = now_ns()

    wpl = huff.weighted_path_length(code_map, ft)
    avg_len = wpl / max(1, len(data))
    entropy = shannon_entropy(ft)
    efficiency = entropy / avg_len if avg_len > 0 else 0.0

    prefix_free_ok = 1 if huff.is_prefix_free(code_map.values()) else 0
    bits = huff.huffman_encode(data, code_map)
    roundtrip_ok = 1 if bytes(huff.huffman_decode(bits, root)) == data else 0

    return MetricRow(
        exp_name="",
        dataset_name="",
        file_size_bytes=len(data),
        run_id=0,
        unique_symbols=len(ft),
        tree_height=huff.tree_height(root),
        build_tree_ms=ns_to_ms(t1 - t0),
        emit_codes_ms=ns_to_ms(t2 - t1),
        weighted_path_length=wpl,
        avg_code_length=avg_len,
        entropy_bits=entropy,
        efficiency=efficiency,
        prefix_free_ok=prefix_free_ok,
        roundtrip_ok=roundtrip_ok,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, file_size_bytes and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.file_size_bytes)
        key_to.setdefault(key, []).append(r)

    summary_fields = [
        "exp_name", "dataset_name", "file_size_bytes", "n_runs",
        "avg_code_length_mean", "avg_code_length_stdev",
        "entropy_bits_mean", "entropy_bits_stdev",
        "efficiency_mean", "efficiency_stdev",
        "build_tree_ms_mean", "build_tree_ms_stdev",
        "emit_codes_ms_mean", "emit_codes_ms_stdev",
        "correctness_ok_rate",
    ]

    def mean_stdev(vals: List[float]) -> Tuple[float, float]:
        if len(vals) == 1:
            return vals[0], 0.0
        return statistics.mean(vals), statistics.stdev(vals)

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, size_b = key

            al_m, al_s = mean_stdev([x.avg_code_length for x in items])
            en_m, en_s = mean_stdev([x.entropy_bits for x in items])
            ef_m, ef_s = mean_stdev([x.efficiency for x in items])
            bt_m, bt_s = mean_stdev([x.build_tree_ms for x in items])
            ec_m, ec_s = mean_stdev([x.emit_codes_ms for x in items])
            ok_rate = sum(x.prefix_free_ok and x.roundtrip_ok for x in items) / len(items)

            w.writerow({
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "file_size_bytes": size_b,
                "n_runs": len(items),
                "avg_code_length_mean": al_m,
                "avg_code_length_stdev": al_s,
                "entropy_bits_mean": en_m,
                "entropy_bits_stdev": en_s,
                "efficiency_mean": ef_m,
                "efficiency_stdev": ef_s,
                "build_tree_ms_mean": bt_m,
                "build_tree_ms_stdev": bt_s,
                "emit_codes_ms_mean": ec_m,
                "emit_codes_ms_stdev": ec_s,
                "correctness_ok_rate": ok_rate,
            })


# Plotting

def plot_code_lengths(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))

    def mean_for(dataset: str, field: str) -> float:
        vals = [getattr(r, field) for r in exp_rows if r.dataset_name == dataset]
        return statistics.mean(vals) if vals else float("nan")

    x = list(range(len(datasets)))

    plt.figure()
    plt.plot(x, [mean_for(d, "avg_code_length") for d in datasets], marker="o", label="huffman avg code length")
    plt.plot(x, [mean_for(d, "entropy_bits") for d in datasets], marker="o", label="entropy")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Bits per Symbol")
    plt.title("Experiment 1: Code Length vs Entropy by Distribution")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "exp1_code_length.png", dpi=200)
    plt.close()

    plt.figure()
    plt.plot(x, [mean_for(d, "tree_height") for d in datasets], marker="o")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Tree Height (nodes)")
    plt.title("Experiment 1: Huffman Tree Height by Distribution")
    plt.tight_layout()
    plt.savefig(outdir / "exp1_tree_height.png", dpi=200)
    plt.close()


def plot_size_scaling(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return

    plt.figure()
    for dist in sorted(set(r.dataset_name for r in exp_rows)):
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.file_size_bytes for r in dist_rows))
        y = [statistics.mean(r.avg_code_length for r in dist_rows if r.file_size_bytes == s) for s in sizes]
        plt.plot(sizes, y, marker="o", label=dist)
    plt.xscale("log", base=2)
    plt.xlabel("Data Size (bytes)")
    plt.ylabel("Avg Code Length (bits/symbol)")
    plt.title("Experiment 2: Code Length vs Data Size")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "exp2_code_length.png", dpi=200)
    plt.close()


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def parse_freqs(s: str) -> List[int]:
    return [int(x) for x in parse_csv_list(s)]

def run_experiments(args: argparse.Namespace) -> List[MetricRow]:
    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []
    gen_names = parse_csv_list(args.generators)

    # Experiment 1: distributions (fixed size)
    fixed_size = max(1, args.size_kb) * 1024
    for gen_name in gen_names:
        for run_id in range(1, args.runs + 1):
            dataset_name, data = generate_dataset(gen_name, fixed_size, args.seed + run_id)
            row = run_one(data)
            row.exp_name = "exp1_distribution"
            row.dataset_name = dataset_name
            row.run_id = run_id
            rows.append(row)

    # Experiment 2: size scaling (powers of 2 up to the fixed size)
    sizes: List[int] = []
    s = 256
    while s <= fixed_size:
        sizes.append(s)
        s *= 2

    for gen_name in gen_names:
        for size_b in sizes:
            for run_id in range(1, args.runs + 1):
                dataset_name, data = generate_dataset(gen_name, size_b, args.seed + 10_000 + size_b + run_id)
                row = run_one(data)
                row.exp_name = "exp2_size_scaling"
                row.dataset_name = dataset_name
                row.run_id = run_id
                rows.append(row)

    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    if not args.no_plots:
        plot_code_lengths(rows, outdir)
        plot_size_scaling(rows, outdir)

    ok_rate = sum(r.prefix_free_ok and r.roundtrip_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return rows

def main(argv: Sequence[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Print Huffman codes for an alphabet, or run code-length experiments")
    ap.add_argument("--symbols", type=str, default="".join(DEFAULT_SYMBOLS),
                    help="Distinct single-character symbols, e.g. abcdef")
    ap.add_argument("--freqs", type=str, default=",".join(str(f) for f in DEFAULT_FREQUENCIES),
                    help="Comma-separated frequencies, one per symbol")

    # Experiment controls
    ap.add_argument("--experiments", action="store_true", help="Run experiments instead of printing one code table")
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")
    ap.add_argument("--size_kb", type=int, default=64, help="Experiment 1 data size in KB (also experiment 2 max)")
    ap.add_argument("--generators", type=str, default="uniform256,zipf128,repetitive90,english_like",
                    help="Comma-separated dataset generator names")
    ap.add_argument("--no_plots", action="store_true", help="Skip writing charts")

    args = ap.parse_args(argv)

    if args.experiments:
        run_experiments(args)
        return 0

    try:
        frequencies = parse_freqs(args.freqs)
        get_huffman_codes(list(args.symbols), frequencies)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
