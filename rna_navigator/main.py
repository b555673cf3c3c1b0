# rna_navigator/main.py
import argparse, os, sys
from loguru import logger
from . import __version__, file_io, kernel, sweep, visualization
from .exceptions import InvalidInput
from .utils import sequence_utils as su

LOG_FORMAT = '<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>'

def setup_logging(verbose=False): logger.remove(); logger.add(sys.stderr, format=LOG_FORMAT, level='DEBUG' if verbose else 'INFO')

def add_condition_args(parser):
    cond_group = parser.add_argument_group('Environmental Conditions')
    cond_group.add_argument('--ion', type=float, help='Mg2+ concentration (mM).')
    cond_group.add_argument('--temp', type=float, help='Temperature (C).')
    cond_group.add_argument('--crowding', type=float, help='Macromolecular crowding index (%%).')
    parser.add_argument('-o', '--output-dir', help='Directory for exported files.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log kernel stages at DEBUG level.')

def build_parser(config):
    parser = argparse.ArgumentParser(description=f'RNA-Navigator v{__version__}', formatter_class=argparse.RawTextHelpFormatter)
    subparsers = parser.add_subparsers(dest='command', required=True)
    p_sim = subparsers.add_parser('simulate', help='Estimate the biophysical profile of one sequence.', formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    p_sim.add_argument('-s', '--sequence', help='RNA sequence (A/U/G/C; T is read as U).')
    p_sim.add_argument('--export', action='store_true', help='Write the result as a JSON audit file.')
    add_condition_args(p_sim)

    p_batch = subparsers.add_parser('batch', help='Simulate every sequence of a FASTA file under one set of conditions.', formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    p_batch.add_argument('-i', '--input', required=True, help='Input FASTA file.')
    p_batch.add_argument('--table-format', choices=['xlsx', 'csv'], default='xlsx')
    add_condition_args(p_batch)

    p_sweep = subparsers.add_parser('sweep', help='Vary one condition and tabulate the response.', formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    p_sweep.add_argument('-s', '--sequence', help='RNA sequence (A/U/G/C; T is read as U).')
    p_sweep.add_argument('--parameter', choices=list(sweep.SWEEP_PARAMETERS), required=True)
    p_sweep.add_argument('--start', type=float, required=True); p_sweep.add_argument('--stop', type=float, required=True)
    p_sweep.add_argument('--steps', type=int, default=20)
    p_sweep.add_argument('--table-format', choices=['xlsx', 'csv'], default='xlsx')
    add_condition_args(p_sweep)

    for sub in (p_sim, p_batch, p_sweep): sub.set_defaults(**config)
    return parser

def log_result(result):
    audit = result.audit_detail
    logger.info(f'Sequence: {result.sequence} ({len(result.sequence)} nt)')
    logger.info(f'  Free energy estimate : {result.free_energy_estimate:.3f} kcal/mol')
    logger.info(f'  Observed rate        : {result.observed_rate:.4g} min^-1')
    logger.info(f'  Diffusion limit      : {audit.diffusion_limit:.4g} min^-1')
    logger.info(f'  Sweet-spot progress  : {audit.sweet_spot_progress:.1f} %')
    logger.info(f'  Resonance synergy    : {audit.resonance_sync:.4f} (warp x{audit.warp_factor:.3g})')
    logger.success(f'Efficiency: {result.efficiency_label.name}')
    if result.interpretation_hint: logger.info(f'  {result.interpretation_hint}')

def main(argv=None):
    setup_logging()
    config = file_io.load_default_config()
    ranges = config.pop('ranges', {})
    args = build_parser(config).parse_args(argv)
    setup_logging(args.verbose)
    su.check_parameter_ranges(args.ion, args.temp, args.crowding, ranges)

    try:
        if args.command == 'simulate':
            sequence = su.validate_sequence(args.sequence)
            logger.info('Initialising biophysical kernel simulation...')
            result = kernel.simulate(sequence, args.ion, args.temp, args.crowding)
            logger.success('Computation complete.')
            log_result(result)
            if args.export: file_io.export_audit_json(result, args.output_dir)

        elif args.command == 'batch':
            try: sequences = file_io.read_fasta(args.input)
            except FileNotFoundError: sys.exit(1)  # already logged by read_fasta
            if not sequences: logger.error(f'No sequences found in \'{args.input}\'.'); sys.exit(1)
            logger.info(f'Starting batch of {len(sequences)} sequence(s).')
            df = sweep.run_batch(sequences, args.ion, args.temp, args.crowding)
            if df.empty: logger.error('No valid sequences to simulate.'); sys.exit(1)
            base_name = os.path.splitext(os.path.basename(args.input))[0]
            file_io.write_table(df, os.path.join(args.output_dir, f'{base_name}_batch.{args.table_format}'))
            params = {'Input': args.input, 'Mg2+ (mM)': args.ion, 'Temperature (C)': args.temp, 'Crowding (%)': args.crowding}
            file_io.write_summary(sweep.summarize_labels(df), params, os.path.join(args.output_dir, f'{base_name}_summary.txt'))

        elif args.command == 'sweep':
            values = sweep.parameter_grid(args.start, args.stop, args.steps)
            base = {'ion_concentration': args.ion, 'temperature': args.temp, 'crowding_index': args.crowding}
            df = sweep.run_sweep(args.sequence, args.parameter, values, base)
            prefix = os.path.join(args.output_dir, f'sweep_{args.parameter}')
            file_io.write_table(df, f'{prefix}.{args.table_format}')
            sequence = df['sequence'].iloc[0]
            title = f"{sequence[:20]}{'...' if len(sequence) > 20 else ''} | observed rate vs {args.parameter}"
            visualization.generate_svg_profile(df, args.parameter, f'{prefix}_profile.svg', title=title)
            params = {'Sequence': sequence, 'Parameter': args.parameter, 'Range': f'{args.start}-{args.stop} ({args.steps} steps)', **base}
            file_io.write_summary(sweep.summarize_labels(df), params, f'{prefix}_summary.txt')
    except InvalidInput as e:
        logger.critical(f'FATAL: {e}'); sys.exit(1)
    logger.success('RNA-Navigator finished.')

if __name__ == '__main__': main()
