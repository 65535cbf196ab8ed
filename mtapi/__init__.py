"""
*****
mtapi
*****

Client library and command line interface for the MindTouch (Deki) REST API.
"""

__version__ = '0.3.1'

# monkey patch the user agent
try:
    import requests.utils

    if 'old_dau' not in dir(requests.utils):
        requests.utils.old_dau = requests.utils.default_user_agent

        def new_dau():
            return __name__ + '/' + __version__ + ' ' + requests.utils.old_dau()

        requests.utils.default_user_agent = new_dau
except ImportError:
    pass
