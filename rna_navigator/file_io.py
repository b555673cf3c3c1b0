# rna_navigator/file_io.py
import os, json, time, yaml
import pandas as pd
from loguru import logger
from Bio import SeqIO

CONFIG_NAME = 'rna-navigator.yaml'

def read_fasta(file_path):
    if not file_path: return {}
    try: return {rec.id: str(rec.seq) for rec in SeqIO.parse(file_path, 'fasta')}
    except FileNotFoundError: logger.critical(f'FASTA not found: {file_path}'); raise

def load_config(config_path):
    if os.path.exists(config_path):
        with open(config_path, 'r') as f: return yaml.safe_load(f) or {}
    return {}

def load_default_config(pkg_path=None, local_path=CONFIG_NAME):
    """Packaged defaults, overridden key-by-key by a config file in the working directory."""
    pkg_path = pkg_path or os.path.dirname(os.path.realpath(__file__))
    config = load_config(os.path.join(pkg_path, 'config', CONFIG_NAME))
    local = load_config(local_path)
    if local:
        logger.info(f'Loaded local overrides from {local_path}: {", ".join(local.keys())}')
        config.update(local)
    return config

def export_audit_json(result, output_dir):
    """Writes the result record to RNA_Audit_<epoch-ms>.json and returns the path."""
    os.makedirs(output_dir, exist_ok=True)
    out_path = os.path.join(output_dir, f'RNA_Audit_{int(time.time() * 1000)}.json')
    with open(out_path, 'w', encoding='utf-8') as f: json.dump(result.to_dict(), f, indent=2)
    logger.success(f'Audit exported as JSON: {out_path}')
    return out_path

def write_table(df, out_path):
    """Writes a batch or sweep table as .xlsx (openpyxl) or, for any other extension, as .csv."""
    os.makedirs(os.path.dirname(out_path) or '.', exist_ok=True)
    if out_path.endswith('.xlsx'): df.to_excel(out_path, index=False, engine='openpyxl')
    else: df.to_csv(out_path, index=False)
    logger.success(f'Wrote {len(df)} rows to {out_path}')
    return out_path

def write_summary(label_counts, params, out_path):
    with open(out_path, 'w') as f:
        f.write(f'RNA-Navigator Summary\n{"="*70}\n\n--- Run Parameters ---\n')
        for key, value in params.items(): f.write(f'  {key}: {value}\n')
        f.write('\n--- Efficiency Labels ---\n')
        for label, count in label_counts.items(): f.write(f'  {count:>7} {label}\n')
        f.write(f'  ---------------------------\n  {sum(label_counts.values()):>7} Total Runs\n')
    return out_path
