from flask import render_template_string

HTML_TEMPLATE = '''
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>File Upload</title>
    <style>
        body, h1, h2, ul, form, input, button, select { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: Arial, sans-serif;
            line-height: 1.6;
            padding: 20px;
            background-color: #f4f4f4;
        }
        h1, h2 {
            margin-bottom: 20px;
            text-align: center;
        }
        form {
            background: #fff;
            padding: 20px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0, 0, 0, 0.1);
            margin-bottom: 20px;
        }
        label {
            display: block;
            margin-bottom: 8px;
            font-weight: bold;
        }
        input[type="file"], input[type="text"], select, button {
            width: 100%;
            padding: 10px;
            margin-bottom: 15px;
            border: 1px solid #ccc;
            border-radius: 4px;
            font-size: 16px;
        }
        button {
            background-color: #28a745;
            color: white;
            border: none;
            cursor: pointer;
        }
        button:hover { background-color: #218838; }
        ul { list-style-type: none; padding: 0; }
        ul li {
            background: #fff;
            padding: 10px;
            margin-bottom: 10px;
            border-radius: 4px;
            box-shadow: 0 2px 4px rgba(0, 0, 0, 0.1);
        }
        ul li a { text-decoration: none; color: #007bff; }
        ul li a:hover { text-decoration: underline; }
        @media (min-width: 600px) {
            body { max-width: 600px; margin: 0 auto; }
            form { display: grid; grid-template-columns: 1fr; gap: 15px; }
            input[type="file"], input[type="text"], select, button { margin-bottom: 0; }
        }
    </style>
</head>
<body>
    <h1>Upload a File</h1>
    <form action="{{ url_for('upshare.upload_file') }}" method="POST" enctype="multipart/form-data">
        <label for="directory">Select Upload Directory:</label>
        <select name="directory" id="directory" required>
        {% for directory in directories %}
            <option value="{{ directory }}">{{ directory }}</option>
        {% endfor %}
        </select>
        <label>
            <input type="checkbox" id="addTimestamp" name="addTimestamp"{% if add_timestamp %} checked{% endif %}>
            <span>Add Timestamp to Filename:</span>
        </label>
        <input type="file" name="file" required>
        <button type="submit">Upload</button>
    </form>

    <h2>Add New Upload Directory</h2>
    <form action="{{ url_for('upshare.add_directory') }}" method="POST">
        <input type="text" name="newDirectory" placeholder="Upload Directory Name" required>
        <button type="submit">Add Directory</button>
    </form>

    <h2>Uploaded Files</h2>
    <ul>
    {% for listing in listings %}
        {% for name in listing.files %}
            {% if listing.name == base_directory %}
        <li><a href="{{ url_for('upshare.download_file', filename=name) }}" download>{{ name }}</a></li>
            {% else %}
        <li><a href="{{ url_for('upshare.download_file', filename=listing.name ~ '/' ~ name) }}" download>{{ listing.name }}/{{ name }}</a></li>
            {% endif %}
        {% endfor %}
    {% endfor %}
    </ul>
</body>
</html>
'''


def render_index(directories, listings, add_timestamp, base_directory):
    """Render the upload page.

    ``listings`` is a sequence of ``DirectoryListing``; files of
    ``base_directory`` link to ``/download/<name>``, the others to
    ``/download/<directory>/<name>``.
    """
    return render_template_string(
        HTML_TEMPLATE,
        directories=directories,
        listings=listings,
        add_timestamp=add_timestamp,
        base_directory=base_directory,
    )
