#!/usr/bin/env python3
import sys
import os
import argparse
import logging
import logging.handlers
import signal
import appdirs

import mtapi
from mtapi.api import client
from mtapi.api.identifiers import build_page_id, build_page_id_from_path

_app_name = 'mindtouch_cli'

logger = logging.getLogger(_app_name)

# path settings

cp = os.environ.get('MINDTOUCH_CLI_CACHE_PATH')
sp = os.environ.get('MINDTOUCH_CLI_SETTINGS_PATH')

CACHE_PATH = cp if cp else appdirs.user_cache_dir(_app_name)
SETTINGS_PATH = sp if sp else appdirs.user_config_dir(_app_name)

# consts

MAX_LOG_SIZE = 10 * 2 ** 20
MAX_LOG_FILES = 5

# return values

ERROR_RETVAL = 1
INVALID_ARG_RETVAL = 2
INIT_FAILED_RETVAL = 3
KEYB_INTERR_RETVAL = 4
NOT_FOUND_RETVAL = 8


def signal_handler(signal_, frame):
    sys.exit(KEYB_INTERR_RETVAL)


signal.signal(signal.SIGINT, signal_handler)
if hasattr(signal, 'SIGPIPE'):
    signal.signal(signal.SIGPIPE, signal_handler)


def pprint(output) -> int:
    """Prints a response; a missing response means the request failed."""
    if output is None:
        return ERROR_RETVAL
    if isinstance(output, bytes):
        output = output.decode('utf-8', errors='replace')
    print(output)


def page_id_arg(val: str) -> 'Union[int, str]':
    """Numeric arguments are page IDs, anything else is a page path."""
    if val.isdigit():
        return int(val)
    if val == 'home':
        return val
    return build_page_id_from_path(val)


def user_id_arg(val: str) -> 'Union[int, str]':
    return int(val) if val.isdigit() else val


def option_args(pairs: list) -> dict:
    """Converts ['key=value', ...] to a dict."""
    options = {}
    for pair in pairs or []:
        key, sep, value = pair.partition('=')
        if not sep:
            logger.critical('Invalid option "%s", expected key=value.' % pair)
            sys.exit(INVALID_ARG_RETVAL)
        options[key] = value
    return options


#
# Actions
#

def print_version_action(args: argparse.Namespace):
    print('%s %s' % (_app_name, mtapi.__version__))


def page_id_action(args: argparse.Namespace):
    if args.title:
        print(build_page_id(args.title, args.path))
    else:
        print(build_page_id_from_path(args.path))


def page_action(args: argparse.Namespace):
    return pprint(args.mt_client.page_get(args.page))


def exists_action(args: argparse.Namespace) -> int:
    if args.draft:
        exists = args.mt_client.drafts_exists(args.page)
    else:
        exists = args.mt_client.page_exists(args.page)
    print('yes' if exists else 'no')
    return 0 if exists else NOT_FOUND_RETVAL


def contents_action(args: argparse.Namespace):
    getter = args.mt_client.drafts_contents_get if args.draft \
        else args.mt_client.page_contents_get
    return pprint(getter(args.page, option_args(args.option)))


def subpages_action(args: argparse.Namespace):
    return pprint(args.mt_client.pages_subpages_get(args.page))


def tags_action(args: argparse.Namespace):
    return pprint(args.mt_client.page_tags_get(args.page))


def set_tags_action(args: argparse.Namespace):
    return pprint(args.mt_client.page_tags_set(args.page, args.tag))


def search_action(args: argparse.Namespace):
    return pprint(args.mt_client.search(args.query, option_args(args.option)))


def feed_action(args: argparse.Namespace):
    return pprint(args.mt_client.site_feed_get(option_args(args.option)))


def site_tags_action(args: argparse.Namespace):
    return pprint(args.mt_client.site_tags_get(option_args(args.option)))


def activity_action(args: argparse.Namespace):
    return pprint(args.mt_client.site_activity_get(args.since))


def users_action(args: argparse.Namespace):
    return pprint(args.mt_client.users_get(args.user, option_args(args.option)))


def export_action(args: argparse.Namespace):
    page = args.page if args.page is not None else ''
    if isinstance(page, str) and page.isdigit():
        page = int(page)
    return pprint(args.mt_client.site_export(page))


def login_link_action(args: argparse.Namespace) -> int:
    api_key = args.mt_client.credentials.api_key
    if not api_key:
        logger.critical('An API key is required to build login links.')
        return INVALID_ARG_RETVAL
    print(args.mt_client.users_authenticate_link(api_key, args.username, args.redirect))


offline_actions = [print_version_action, page_id_action]


def set_log_level(args: argparse.Namespace):
    fmt = '%(asctime)s.%(msecs).03d [%(levelname)s] [%(name)s] - %(message)s'
    ansi_fmt = fmt + '\x1b[K'  # clear right
    time_fmt = '%y-%m-%d %H:%M:%S'

    dumbfmtter = logging.Formatter(fmt=fmt, datefmt=time_fmt)
    ansifmtter = logging.Formatter(fmt=ansi_fmt, datefmt=time_fmt)

    # stderr handler
    sh = logging.StreamHandler()
    tty = hasattr(sys.__stderr__, 'isatty') and sys.__stderr__.isatty()
    sh.setFormatter(ansifmtter if tty else dumbfmtter)

    lvl = logging.WARNING
    if args.verbose:
        lvl = logging.INFO
    elif args.debug:
        lvl = logging.DEBUG
    sh.setLevel(lvl)

    if args.debug and args.debug > 1:
        import http.client
        http.client.HTTPConnection.debuglevel = 1

    root_logger = logging.getLogger()
    root_logger.addHandler(sh)
    if args.log:
        # debug log files in cache path
        os.makedirs(CACHE_PATH, mode=0o0700, exist_ok=True)
        rfh = logging.handlers.RotatingFileHandler(os.path.join(CACHE_PATH, _app_name + '.log'),
                                                   maxBytes=MAX_LOG_SIZE,
                                                   backupCount=MAX_LOG_FILES)
        rfh.setFormatter(dumbfmtter)
        rfh.setLevel(logging.DEBUG)
        root_logger.addHandler(rfh)
        root_logger.setLevel(logging.DEBUG)
    else:
        root_logger.setLevel(lvl)


# noinspection PyProtectedMember
class Argument(object):
    """Simple argparse argument container"""

    def __init__(self, *args, **kwargs):
        self.args = args
        self.kwargs = kwargs

    def attach(self, subparser: argparse._ActionsContainer):
        subparser.add_argument(*self.args, **self.kwargs)


def get_parser() -> tuple:
    page = Argument('page', type=page_id_arg,
                    help='numeric page ID, "home" or page path, e.g. "Guides/TCP//IP"')
    draft = Argument('--draft', '-D', action='store_true', help='operate on the page\'s draft')
    option = Argument('--option', '-o', action='append', default=[], metavar='KEY=VALUE',
                      help='additional query option [repeatable]')

    opt_parser = argparse.ArgumentParser(
        prog=_app_name, formatter_class=argparse.RawTextHelpFormatter,
        epilog='Hints: \n'
               '  * Pages may be specified by numeric ID or by path; '
               'slashes inside a title are written as "//"\n'
               '  * Credentials are read from "%s" in the settings path'
               % client._SETTINGS_FILENAME)
    log_group = opt_parser.add_mutually_exclusive_group()
    log_group.add_argument('-v', '--verbose', action='count',
                           help='print more info messages')
    log_group.add_argument('-d', '--debug', action='count',
                           help='turn on debug mode [-dd: print HTTP traffic]')
    opt_parser.add_argument('--log', '-l', action='store_true',
                            help='write debug log file to the cache path')
    opt_parser.add_argument('--domain', help='override the API domain')

    subparsers = opt_parser.add_subparsers(title='action', dest='action')
    subparsers.required = True

    vers_sp = subparsers.add_parser('version', aliases=['v'], help='print version and exit\n')
    vers_sp.set_defaults(func=print_version_action)

    pid_sp = subparsers.add_parser('page-id', help='print the encoded page ID of a path\n')
    pid_sp.add_argument('path', help='page path, or parent path when --title is given')
    pid_sp.add_argument('--title', '-t', help='page title (slashes are literal)')
    pid_sp.set_defaults(func=page_id_action)

    page_sp = subparsers.add_parser('page', aliases=['p'], help='print page information\n')
    page.attach(page_sp)
    page_sp.set_defaults(func=page_action)

    exists_sp = subparsers.add_parser('exists', aliases=['e'],
                                      help='check whether a page (or draft) exists\n')
    draft.attach(exists_sp)
    page.attach(exists_sp)
    exists_sp.set_defaults(func=exists_action)

    contents_sp = subparsers.add_parser('contents', aliases=['c'],
                                        help='print the contents of a page (or draft)\n')
    draft.attach(contents_sp)
    option.attach(contents_sp)
    page.attach(contents_sp)
    contents_sp.set_defaults(func=contents_action)

    subpages_sp = subparsers.add_parser('subpages', aliases=['ls'],
                                        help='list the subpages of a page\n')
    page.attach(subpages_sp)
    subpages_sp.set_defaults(func=subpages_action)

    tags_sp = subparsers.add_parser('tags', help='list the tags of a page\n')
    page.attach(tags_sp)
    tags_sp.set_defaults(func=tags_action)

    set_tags_sp = subparsers.add_parser('set-tags', help='replace the tags of a page\n')
    page.attach(set_tags_sp)
    set_tags_sp.add_argument('tag', nargs='*')
    set_tags_sp.set_defaults(func=set_tags_action)

    search_sp = subparsers.add_parser('search', aliases=['s'], help='search the site\n')
    option.attach(search_sp)
    search_sp.add_argument('query')
    search_sp.set_defaults(func=search_action)

    feed_sp = subparsers.add_parser('feed', help='print the feed of site changes\n')
    option.attach(feed_sp)
    feed_sp.set_defaults(func=feed_action)

    site_tags_sp = subparsers.add_parser('site-tags', help='list the site\'s tags\n')
    option.attach(site_tags_sp)
    site_tags_sp.set_defaults(func=site_tags_action)

    activity_sp = subparsers.add_parser('activity', help='print the site activity report\n')
    activity_sp.add_argument('since', nargs='?', default='', help='start date of the report')
    activity_sp.set_defaults(func=activity_action)

    users_sp = subparsers.add_parser('users', aliases=['u'],
                                     help='list users or print a single user\n')
    option.attach(users_sp)
    users_sp.add_argument('user', nargs='?', default='', type=user_id_arg,
                          help='user ID, user name or "current"')
    users_sp.set_defaults(func=users_action)

    export_sp = subparsers.add_parser('export', help='generate export information\n')
    export_sp.add_argument('page', nargs='?', default=None,
                           help='numeric page ID or page path [default: whole site]')
    export_sp.set_defaults(func=export_action)

    link_sp = subparsers.add_parser('login-link', help='build a login link for a user\n')
    link_sp.add_argument('username')
    link_sp.add_argument('--redirect', '-r', default='', help='URL to visit after logging in')
    link_sp.set_defaults(func=login_link_action)

    return opt_parser, subparsers


def main():
    opt_parser, subparsers = get_parser()
    args = opt_parser.parse_args()

    set_log_level(args)

    import colorama
    colorama.init()

    logger.info('Settings path is "%s".' % SETTINGS_PATH)

    mt_client = None
    if args.func not in offline_actions:
        try:
            mt_client = client.MindTouchClient(settings_path=SETTINGS_PATH)
        except (ValueError, KeyError) as e:
            logger.critical('Invalid settings: %s' % e)
            sys.exit(INIT_FAILED_RETVAL)

        if args.domain:
            creds = mt_client.credentials
            mt_client.configure(args.domain, creds.username, creds.password, creds.api_key,
                                creds.api_secret,
                                secure=not creds.base_url.startswith('http:'),
                                verify_ssl=creds.verify_ssl)
        if not mt_client.base_url:
            logger.critical('No API domain configured. Use --domain or the settings file.')
            sys.exit(INIT_FAILED_RETVAL)
        mt_client.set_format('raw')

    args.__setattr__('mt_client', mt_client)

    # call appropriate sub-parser action
    logger.debug(args)
    ret = args.func(args)

    if ret:
        sys.exit(ret)


if __name__ == "__main__":
    main()
