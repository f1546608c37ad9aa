from flask import Flask, request, send_file, jsonify
import io
import os
import logging
from flask_cors import CORS

from ringmesh import (
    adapter_from_measurements,
    adapter_pair,
    analyze_stl,
    build_adapter_mesh,
    build_ring_mesh,
    calculate_dust_collection_clearance,
    fit_kit,
    spec_from_inner_diameter,
    spec_from_outer_diameter,
    stl_bytes,
)
from ringmesh.logging_config import setup_logging
from ringmesh.settings import DEFAULT_HEIGHT, DEFAULT_SEGMENTS, DEFAULT_THICKNESS
from ringmesh.sizing import clearance_table, generate_filename

app = Flask(__name__)

# CORS: open in development, restricted to configured origins otherwise
allowed_origins = [o for o in os.environ.get('RING_ALLOWED_ORIGINS', '').split(',') if o]
if os.environ.get('FLASK_ENV') == 'development':
    allowed_origins.extend(['http://localhost:3000', 'http://127.0.0.1:3000', 'http://localhost:5001'])
CORS(app, origins=allowed_origins or '*')

app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # uploaded STL files for /analyze_stl
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-key-change-in-production')
app.config['RING_MAX_SEGMENTS'] = int(os.environ.get('RING_MAX_SEGMENTS', 1024))


def _number(data, key, default=None):
    value = data.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f'{key} must be a number')
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f'{key} must be a number, got {value!r}')


def _ring_spec_from_request(data):
    """Build a RingSpec from request JSON; exactly one of inner/outer diameter."""
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')

    inner = _number(data, 'inner_diameter')
    outer = _number(data, 'outer_diameter')
    if (inner is None) == (outer is None):
        raise ValueError('Specify exactly one of "inner_diameter" or "outer_diameter"')

    thickness = _number(data, 'thickness', DEFAULT_THICKNESS)
    height = _number(data, 'height', DEFAULT_HEIGHT)
    segments = data.get('segments', DEFAULT_SEGMENTS)
    if isinstance(segments, bool) or not isinstance(segments, int):
        raise ValueError('segments must be an integer')
    if segments > app.config['RING_MAX_SEGMENTS']:
        raise ValueError(f"segments must be <= {app.config['RING_MAX_SEGMENTS']}")

    label = data.get('label')
    if label is not None and not isinstance(label, str):
        raise ValueError('label must be a string')
    label_raised = data.get('label_raised', True)
    if not isinstance(label_raised, bool):
        raise ValueError('label_raised must be true or false')
    options = {'label_raised': label_raised}
    for key in ('text_depth', 'text_height'):
        if data.get(key) is not None:
            options[key] = _number(data, key)

    if inner is not None:
        return spec_from_inner_diameter(inner, thickness, height, segments, label=label, **options)
    return spec_from_outer_diameter(outer, thickness, height, segments, label=label, **options)


@app.route('/health')
def health_check():
    return jsonify({'status': 'ok', 'message': 'Ring STL backend is running'})


@app.route('/generate_ring_stl', methods=['POST'])
def generate_ring_stl():
    if not request.is_json:
        return jsonify({'error': 'Content-Type must be application/json'}), 400
    data = request.get_json(silent=True)

    try:
        spec = _ring_spec_from_request(data)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    app.logger.info(
        f"Request /generate_ring_stl → id={spec.inner_diameter}, od={spec.outer_diameter}, "
        f"h={spec.height}, segments={spec.segments}, label={spec.label!r}"
    )

    try:
        mesh = build_ring_mesh(spec)
        stl_io = stl_bytes(mesh)
    except Exception as e:
        app.logger.error(f"Failed to generate ring STL: {e}")
        return jsonify({'error': f'Failed to generate STL: {str(e)}'}), 500

    filename = generate_filename(
        spec.inner_diameter, spec.thickness, spec.height,
        spec.label_on_inner, outer_diameter=spec.outer_diameter,
    )
    return send_file(stl_io, mimetype='model/stl', as_attachment=True, download_name=filename)


@app.route('/clearance')
def clearance():
    """Recommended clearance for one diameter, or the table of common sizes."""
    if 'diameter' not in request.args:
        return jsonify({'sizes': clearance_table()})
    try:
        diameter = _number(request.args, 'diameter')
        optimal = calculate_dust_collection_clearance(diameter)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        app.logger.error(f"Failed to calculate clearance: {e}")
        return jsonify({'error': f'Failed to calculate clearance: {str(e)}'}), 500

    step = round(optimal / 4.0, 2)
    return jsonify({
        'diameter': diameter,
        'optimal': optimal,
        'step': step,
        # Ring to print over a measured outside, or into a measured bore
        'outer_fit_inner_diameter': diameter + optimal,
        'inner_fit_outer_diameter': diameter - optimal,
    })


def _ring_list(rings):
    return [
        {
            'name': ring.name,
            'description': ring.description,
            'inner_diameter': ring.spec.inner_diameter,
            'outer_diameter': ring.spec.outer_diameter,
            'label': ring.spec.label,
            'label_on_inner': ring.spec.label_on_inner,
        }
        for ring in rings
    ]


def _measured_ring_set(builder):
    """Run a replica-based ring set builder (fit kit, adapter pair) on request JSON."""
    data = request.get_json(silent=True) or {}
    try:
        base = _number(data, 'diameter')
        if base is None:
            raise ValueError('diameter is required')
        outer = data.get('outer', True)
        if not isinstance(outer, bool):
            raise ValueError('outer must be true or false')
        rings = builder(
            base,
            is_outer_mode=outer,
            thickness=_number(data, 'thickness', DEFAULT_THICKNESS),
            height=_number(data, 'height', DEFAULT_HEIGHT),
        )
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        app.logger.error(f"Failed to size rings: {e}")
        return jsonify({'error': f'Failed to size rings: {str(e)}'}), 500

    return jsonify({'rings': _ring_list(rings)})


@app.route('/fit_kit', methods=['POST'])
def generate_fit_kit():
    return _measured_ring_set(fit_kit)


@app.route('/adapter_pair', methods=['POST'])
def generate_adapter_pair():
    return _measured_ring_set(adapter_pair)


@app.route('/generate_adapter_stl', methods=['POST'])
def generate_adapter_stl():
    """Tapered adapter from one measured diameter per side (``inner1``/``outer1``, ``inner2``/``outer2``)."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    try:
        segments = data.get('segments', DEFAULT_SEGMENTS)
        if isinstance(segments, bool) or not isinstance(segments, int):
            raise ValueError('segments must be an integer')
        if segments > app.config['RING_MAX_SEGMENTS']:
            raise ValueError(f"segments must be <= {app.config['RING_MAX_SEGMENTS']}")
        spec = adapter_from_measurements(
            inner1=_number(data, 'inner1'),
            outer1=_number(data, 'outer1'),
            inner2=_number(data, 'inner2'),
            outer2=_number(data, 'outer2'),
            segments=segments,
        )
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    app.logger.info(
        f"Request /generate_adapter_stl → side1={tuple(spec.side1)}, side2={tuple(spec.side2)}, "
        f"segments={spec.segments}"
    )

    try:
        stl_io = stl_bytes(build_adapter_mesh(spec))
    except Exception as e:
        app.logger.error(f"Failed to generate adapter STL: {e}")
        return jsonify({'error': f'Failed to generate STL: {str(e)}'}), 500

    return send_file(stl_io, mimetype='model/stl', as_attachment=True, download_name=f'{spec.name}.stl')


@app.route('/analyze_stl', methods=['POST'])
def analyze_uploaded_stl():
    """Inspect an STL sent as the raw request body or as form file ``file``."""
    upload = request.files.get('file')
    payload = upload.read() if upload else request.get_data()
    if not payload:
        return jsonify({'error': 'No STL data provided'}), 400

    try:
        report = analyze_stl(io.BytesIO(payload))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        app.logger.error(f"Failed to analyze STL: {e}")
        return jsonify({'error': 'Could not read STL data'}), 400

    return jsonify(report.as_dict())


if __name__ == '__main__':
    setup_logging(logging.DEBUG if os.environ.get('FLASK_ENV') == 'development' else logging.INFO)
    app.run(debug=True, port=5001)
