#!/usr/bin/env python3
"""
Flask Web Application for the Action Graph Analyzer
Provides both a web UI and REST API endpoints for analyzing Go build action graphs.
"""

from flask import Flask, render_template, request, jsonify
from werkzeug.utils import secure_filename
import os
import tempfile
from actiongraph import ActionGraphAnalyzer, ActionGraphError
from actiongraph.web import prepare_results

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024
app.config['UPLOAD_FOLDER'] = tempfile.gettempdir()

ALLOWED_EXTENSIONS = {'json'}


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def query_options(form):
    """Read the tree, top and graph options from submitted form fields."""
    try:
        level = int(form.get('level') or -1)
        limit = int(form.get('limit') or 20)
    except ValueError:
        raise ActionGraphError('level and limit must be integers')
    return {
        'focus': (form.get('focus') or '').split(),
        'level': level,
        'why': (form.get('why') or '').strip(),
        'limit': limit,
    }


def analyze_upload(file, options):
    """Save the upload, analyze it and remove it again."""
    filename = secure_filename(file.filename)
    filepath = os.path.join(app.config['UPLOAD_FOLDER'], filename)
    file.save(filepath)

    try:
        analyzer = ActionGraphAnalyzer()
        analyzer.process_file(filepath)
    finally:
        os.remove(filepath)

    return filename, prepare_results(analyzer, **options)


@app.route('/')
def index():
    """Main page with file upload form."""
    return render_template('index.html')


@app.route('/api/analyze', methods=['POST'])
def analyze_api():
    """
    API endpoint to analyze an action graph file.
    Accepts: multipart/form-data with fields:
      - 'file': action graph JSON file
      - 'focus': whitespace separated package paths for the tree (optional)
      - 'level': tree depth limit (optional, default: -1 for unlimited)
      - 'why': package whose dependency paths the graph shows (optional)
      - 'limit': number of slowest steps (optional, default: 20)
    Returns: JSON with analysis results
    """
    if 'file' not in request.files:
        return jsonify({'error': 'No file provided'}), 400

    file = request.files['file']

    if not file.filename:
        return jsonify({'error': 'No file selected'}), 400

    if not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type. Only JSON files are allowed.'}), 400

    try:
        _, results = analyze_upload(file, query_options(request.form))
        return jsonify(results)

    except ActionGraphError as e:
        return jsonify({'error': str(e)}), 400

    except Exception as e:
        return jsonify({'error': str(e)}), 500


@app.route('/analyze', methods=['POST'])
def analyze_web():
    """
    Web endpoint to analyze an action graph file.
    Accepts: the same multipart/form-data fields as /api/analyze
    Returns: HTML results page
    """
    if 'file' not in request.files:
        return render_template('index.html', error='No file provided')

    file = request.files['file']

    if not file.filename:
        return render_template('index.html', error='No file selected')

    if not allowed_file(file.filename):
        return render_template('index.html', error='Invalid file type. Only JSON files are allowed.')

    try:
        filename, results = analyze_upload(file, query_options(request.form))
        return render_template('results.html',
                               filename=filename,
                               results=results)

    except Exception as e:
        return render_template('index.html', error=f'Error analyzing file: {str(e)}')


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5001)
