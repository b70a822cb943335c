from flask import jsonify


def success(data=None, message=None, status=200):
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def failure(error):
    return jsonify(error.to_dict()), error.status_code
