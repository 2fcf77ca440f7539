"""
Performance Benchmark
=====================

Timing and proof-size measurements over the RFC 3526 2048-bit MODP group:
- sign / verify_sig for each protocol
- multi-base proofs for growing numbers of bases
- aggregated (MetaProver) proofs for growing numbers of statements
- serialized proof sizes

Usage:
    pip install 'sigmazk[bench]'
    python doc/performance_benchmark.py
"""

import json
import os
import sys
import time
from typing import Dict, List, Tuple

import numpy as np

# make sigmazk importable without installing it
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sigmazk import MetaProver, MetaVerifier, modp_2048
from sigmazk.pedersen import (
    GeneralizedPedersenProver, GeneralizedPedersenVerifier, PedersenProver,
    PedersenVerifier, generalized_commit, pedersen_commit,
)
from sigmazk.schnorr import SchnorrProver, SchnorrVerifier, keygen
from sigmazk.serialization import dumps_proof
from sigmazk.zr import random_below

MESSAGE = b"benchmark message"


class PerformanceBenchmark:
    """Benchmarks sign / verify_sig over a fixed group."""

    def __init__(self, max_bases: int = 16):
        print("🔧 Setting up 2048-bit MODP group...")
        self.params = modp_2048(n_bases=max_bases)
        self.q = self.params['q']
        self.results = {}

    def measure_time(self, func, *args, num_runs=10, **kwargs) -> Tuple[float, float, object]:
        """
        Mean and standard deviation (seconds) of ``num_runs`` calls.

        Returns
        -------
        (mean, std, result of the last call)
        """
        times = []
        result = None
        for _ in range(num_runs):
            start = time.perf_counter()
            result = func(*args, **kwargs)
            times.append(time.perf_counter() - start)
        return float(np.mean(times)), float(np.std(times)), result

    def _secret(self) -> int:
        return random_below(self.q)

    def _measure_pair(self, name: str, prover, verifier, num_runs: int) -> Dict:
        sign_avg, sign_std, proof = self.measure_time(prover.sign, MESSAGE, num_runs=num_runs)
        verify_avg, verify_std, ok = self.measure_time(verifier.verify_sig, MESSAGE, proof, num_runs=num_runs)
        if not ok:
            raise RuntimeError(f"{name}: signature did not verify")

        size = len(dumps_proof(proof).encode('utf-8'))
        print(f"  {name:<28} sign {sign_avg*1000:8.2f} ± {sign_std*1000:.2f} ms   "
              f"verify {verify_avg*1000:8.2f} ± {verify_std*1000:.2f} ms   {size} B")
        return {
            'sign': sign_avg, 'sign_std': sign_std,
            'verify': verify_avg, 'verify_std': verify_std,
            'proof_bytes': size,
        }

    def benchmark_protocols(self, num_runs=10):
        """Single-statement protocols."""
        print(f"\n📊 Protocols ({num_runs} runs each)")
        print("=" * 60)

        priv, pub = keygen(self.params)
        x, r = self._secret(), self._secret()
        z = pedersen_commit(self.params, x, r)

        self.results['protocols'] = {
            'schnorr': self._measure_pair(
                'schnorr', SchnorrProver(self.params, priv), SchnorrVerifier(self.params, pub), num_runs),
            'pedersen': self._measure_pair(
                'pedersen', PedersenProver(self.params, x, r), PedersenVerifier(self.params, z), num_runs),
        }

    def benchmark_bases(self, base_counts: List[int], num_runs=10):
        """Multi-base proofs for each number of bases."""
        print(f"\n📊 Multi-base proofs ({num_runs} runs each)")
        print("=" * 60)

        results = {}
        for n in base_counts:
            bases = self.params['bases'][:n]
            exponents = [self._secret() for _ in range(n)]
            r = self._secret()
            z = generalized_commit(self.params, exponents, r, bases=bases)
            prover = GeneralizedPedersenProver(self.params, exponents, r, bases=bases)
            verifier = GeneralizedPedersenVerifier(self.params, z, bases=bases)
            results[n] = self._measure_pair(f'generalized n={n}', prover, verifier, num_runs)
        self.results['bases'] = results

    def benchmark_aggregation(self, statement_counts: List[int], num_runs=10):
        """MetaProver over k Schnorr statements."""
        print(f"\n📊 Aggregated proofs ({num_runs} runs each)")
        print("=" * 60)

        results = {}
        for k in statement_counts:
            keys = [keygen(self.params) for _ in range(k)]
            prover = MetaProver([SchnorrProver(self.params, priv) for priv, _ in keys])
            verifier = MetaVerifier([SchnorrVerifier(self.params, pub) for _, pub in keys])
            results[k] = self._measure_pair(f'meta k={k}', prover, verifier, num_runs)
        self.results['aggregation'] = results

    def run_all_benchmarks(self, sizes: List[int] = None, num_runs: int = 10):
        if sizes is None:
            sizes = [1, 2, 4, 8, 16]

        print("\n" + "=" * 60)
        print("🚀 Running benchmarks")
        print("=" * 60)

        self.benchmark_protocols(num_runs)
        self.benchmark_bases(sizes, num_runs)
        self.benchmark_aggregation(sizes, num_runs)

        print("\n" + "=" * 60)
        print("✅ Done")
        print("=" * 60)

    def save_results(self, filename='benchmark_results.json'):
        os.makedirs(os.path.dirname(filename) if os.path.dirname(filename) else '.', exist_ok=True)
        with open(filename, 'w') as f:
            json.dump(self.results, f, indent=2, default=str)
        print(f"\n💾 Results saved to {filename}")


if __name__ == '__main__':
    benchmark = PerformanceBenchmark(max_bases=16)
    benchmark.run_all_benchmarks([1, 2, 4, 8, 16], num_runs=10)
    benchmark.save_results('benchmark_results.json')
