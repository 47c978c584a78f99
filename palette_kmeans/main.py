    # main.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from palette_kmeans.core.errors import KMeansError
from palette_kmeans.data.dataset import Dataset
from palette_kmeans.data.image import quantize_image
from palette_kmeans.data.palettes import PALETTES
from palette_kmeans.experiments.config import Backend, ClusteringConfig, make_model
from palette_kmeans.experiments.runner import SeedSweepRunner
from palette_kmeans.utils.logging import setup_logger


def _add_clustering_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-k", "--clusters", type=int, default=None,
                        help="Number of clusters (default 10 or value from --config).")
    parser.add_argument("--max-iters", type=int, default=None,
                        help="Upper bound on EM iterations (default 300).")
    parser.add_argument("--tol", type=float, default=None,
                        help="Inertia convergence threshold; 0 means exact equality.")
    parser.add_argument("--convergence", choices=["inertia", "labels"], default=None,
                        help="Stop when inertia stops changing or when labels stop changing.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for k-means++ initialisation.")
    parser.add_argument("--backend", choices=[b.value for b in Backend], default=None)
    parser.add_argument("--processes", type=int, default=None,
                        help="Worker processes for --backend multiprocessing.")
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON file with ClusteringConfig fields; CLI flags override it.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="palette-kmeans",
        description="K-means colour clustering and palette reduction.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_quant = sub.add_parser("quantize", help="Recolour an image with its k cluster colours.")
    p_quant.add_argument("input", type=Path)
    p_quant.add_argument("output", type=Path)
    p_quant.add_argument("--palette", choices=sorted(PALETTES), default=None,
                         help="Replace every centroid by its nearest palette colour.")
    _add_clustering_args(p_quant)

    p_clust = sub.add_parser("cluster", help="Cluster rows of a delimited text file.")
    p_clust.add_argument("input", type=Path)
    p_clust.add_argument("--delimiter", default=",",
                         help="Column delimiter; use 'ws' for any whitespace.")
    p_clust.add_argument("--output", type=Path, default=None,
                         help="Write centroids and labels as JSON here (default stdout).")
    _add_clustering_args(p_clust)

    p_sweep = sub.add_parser("sweep", help="Repeat clustering of a text file over several seeds.")
    p_sweep.add_argument("input", type=Path)
    p_sweep.add_argument("--delimiter", default=",")
    p_sweep.add_argument("--seeds", type=int, nargs="+", default=list(range(5)))
    _add_clustering_args(p_sweep)

    return parser


def _config_from_args(args: argparse.Namespace) -> ClusteringConfig:
    base = ClusteringConfig.from_json(args.config) if args.config else ClusteringConfig()
    return base.merged(
        n_clusters=args.clusters,
        n_iters=args.max_iters,
        tol=args.tol,
        convergence=args.convergence,
        seed=args.seed,
        backend=args.backend,
        n_processes=args.processes,
    )


def _load_dataset(args: argparse.Namespace) -> Dataset:
    delimiter = None if args.delimiter == "ws" else args.delimiter
    return Dataset.from_csv(args.input, delimiter=delimiter)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = _config_from_args(args)

        if args.command == "quantize":
            model = make_model(config, logger=logger)
            result = quantize_image(
                args.input, args.output, model, rng=config.seed, palette=args.palette
            )
            logger.info(
                f"Quantized {args.input} to {result.n_clusters} colours "
                f"in {result.n_iters} iterations (inertia={result.inertia:.6e})"
            )
            logger.info(f"Output saved to {args.output}")

        elif args.command == "cluster":
            dataset = _load_dataset(args)
            model = make_model(config, logger=logger)
            result = model.fit(dataset.X, rng=config.seed)
            payload = {
                "centroids": result.centroids.tolist(),
                "labels": result.labels.tolist(),
                "inertia": result.inertia,
                "n_iters": result.n_iters,
                "converged": result.converged,
            }
            text = json.dumps(payload, ensure_ascii=False)
            if args.output:
                args.output.write_text(text + "\n", encoding="utf-8")
                logger.info(f"Clustering results saved to {args.output}")
            else:
                sys.stdout.write(text + "\n")

        elif args.command == "sweep":
            dataset = _load_dataset(args)
            runner = SeedSweepRunner(
                dataset.X,
                model_factory=lambda **kw: make_model(config, **kw),
                logger=logger,
            )
            stats = runner.run(args.seeds)
            sys.stdout.write(json.dumps(stats, ensure_ascii=False) + "\n")

    except (KMeansError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
