#!/usr/bin/env python3
"""
iono-correction: Ionospheric Media Correction Calculator

Command-line entry point. Computes one ionospheric correction for the
geometry, signal and epoch described by a TOML configuration file (see
config.py for the layout), with optional overrides.

Usage:
    # Correction for the [measurement] section of a config
    iono-correction --config /etc/iono-correction/config.toml

    # Same geometry, empirical model, another epoch, JSON output
    iono-correction --config config.toml --model TRK-2-23 --epoch 60001.25 --json
"""

import argparse
import logging
import sys

import toml

from .config import IonosphereConfig, MeasurementConfig, load_config
from .engine.ionosphere_engine import IonosphereEngine
from .exceptions import IonosphereCorrectionError

logger = logging.getLogger('iono-correction')


def setup_logging(level: str = 'INFO'):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Ionospheric range/angle/time correction for a tracking signal'
    )
    parser.add_argument('--config', '-c', required=True,
                        help='TOML configuration file')
    parser.add_argument('--model', help='Override [ionosphere].model (IRI2007 or TRK-2-23)')
    parser.add_argument('--epoch', type=float, help='Override epoch (UTC MJD)')
    parser.add_argument('--wavelength', type=float, help='Override signal wavelength (m)')
    parser.add_argument('--log-level', default='INFO',
                        help='Logging level (DEBUG, INFO, WARNING, ERROR)')
    parser.add_argument('--json', action='store_true', help='Print the result as JSON')
    return parser


def configure_engine(engine: IonosphereEngine, measurement: MeasurementConfig, args):
    """Apply the [measurement] section and command-line overrides."""
    engine.set_station_position(measurement.station_position)
    engine.set_spacecraft_position(measurement.spacecraft_position)
    engine.set_station_id(measurement.station_id)
    engine.set_spacecraft_id(measurement.spacecraft_id)

    wavelength = args.wavelength if args.wavelength is not None else measurement.wavelength_m
    if wavelength is not None:
        engine.set_wavelength(wavelength)

    epoch = args.epoch if args.epoch is not None else measurement.epoch_mjd
    if epoch is not None:
        engine.set_time(epoch)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args.config)
        iono_config = IonosphereConfig.from_dict(config)
        if args.model:
            iono_config.model = args.model

        engine = IonosphereEngine.from_config(iono_config)
        configure_engine(engine, MeasurementConfig.from_dict(config), args)
    except (IonosphereCorrectionError, OSError, ValueError, TypeError, toml.TomlDecodeError) as e:
        logger.error(f"Invalid configuration {args.config}: {e}")
        return 1

    try:
        result = engine.correction()
    except IonosphereCorrectionError as e:
        logger.error(f"Correction failed: {e}")
        return 1

    if args.json:
        print(result.to_json())
    else:
        print(f"Model:            {engine.model_name}")
        print(f"Range correction: {result.range_correction:.6f} m")
        print(f"Angle correction: {result.angle_correction:.6e} rad")
        print(f"Time correction:  {result.time_correction:.6e} s")

    logger.debug(f"Stats: {engine.get_stats()}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
