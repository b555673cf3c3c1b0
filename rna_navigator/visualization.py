# rna_navigator/visualization.py
def generate_svg_profile(df, parameter, out_path, title=None):
    """Generates an SVG line plot of the observed rate across a parameter sweep."""
    width, height = 800, 320
    padding = 50
    plot_w, plot_h = width - 2 * padding, height - 2 * padding
    xs, ys = [float(v) for v in df[parameter]], [float(v) for v in df['observedRate']]
    labels = list(df['efficiencyLabel'])
    x_min, x_max = (min(xs), max(xs)) if xs else (0.0, 1.0)
    y_max = max(ys) if ys and max(ys) > 0 else 1.0
    x_span = (x_max - x_min) or 1.0

    def px(x): return padding + (x - x_min) / x_span * plot_w
    def py(y): return height - padding - y / y_max * plot_h

    svg = [f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">']
    svg.append('<style>.title { font: bold 18px sans-serif; } .label { font: 12px sans-serif; }</style>')
    svg.append(f'<text x="{width/2}" y="{padding/2 + 5}" text-anchor="middle" class="title">{title or f"Observed rate vs {parameter}"}</text>')
    # Axes
    svg.append(f'<line x1="{padding}" y1="{height - padding}" x2="{width - padding}" y2="{height - padding}" stroke="#7f8c8d" />')
    svg.append(f'<line x1="{padding}" y1="{padding}" x2="{padding}" y2="{height - padding}" stroke="#7f8c8d" />')
    svg.append(f'<text x="{padding}" y="{height - padding + 15}" class="label">{x_min:g}</text>')
    svg.append(f'<text x="{width - padding}" y="{height - padding + 15}" text-anchor="end" class="label">{x_max:g}</text>')
    svg.append(f'<text x="{padding - 5}" y="{padding}" text-anchor="end" class="label">{y_max:.3g}</text>')
    svg.append(f'<text x="{width/2}" y="{height - 10}" text-anchor="middle" class="label">{parameter}</text>')

    if xs:
        points = ' '.join(f'{px(x):.2f},{py(y):.2f}' for x, y in zip(xs, ys))
        svg.append(f'<polyline points="{points}" fill="none" stroke="#3498db" stroke-width="2" />')
    for x, y, label in zip(xs, ys, labels):
        # QUANTUM_SYNC points in red
        color = '#e74c3c' if label == 'QUANTUM_SYNC' else '#2c3e50'
        svg.append(f'<circle cx="{px(x):.2f}" cy="{py(y):.2f}" r="3" fill="{color}">')
        svg.append(f'  <title>{parameter}={x:g}\nk_obs={y:.4g} min^-1\n{label}</title>')
        svg.append('</circle>')

    svg.append('</svg>')
    with open(out_path, 'w', encoding='utf-8') as f: f.write('\n'.join(svg))
    return out_path
