"""
************
MindTouch API
************

Usage
=====
::

    from mtapi.api import client
    mt = client.MindTouchClient({'api_domain': 'wiki.example.com',
                                 'api_username': 'admin',
                                 'api_password': 'secret'})
    page_id = mt.build_page_id('Installation Guide', 'Products/Widget')
    if mt.page_exists(page_id):
        for tag in mt.page_tags_get(page_id).findall('tag'):
            print(tag['value'])
    # ...

Identifiers
===========

Pages, drafts, users and groups accept either an integer ID or a string name.
Integers are placed into the URL as-is; strings are prefixed with ``=``.
Page and draft names are expected in encoded form, i.e. as returned by
:func:`~mtapi.api.identifiers.build_page_id`, which doubles every slash of the
title and percent-encodes the result twice::

    >>> build_page_id('TCP/IP', 'Networking')
    'Networking%252FTCP%252F%252FIP'

User and group names are encoded by the client itself.

Responses
=========

By default, responses are parsed into :class:`~mtapi.api.response.XmlNode`
objects, which expose child elements as attributes and XML attributes as
items::

    <page id="42"><title>Home</title></page>

    node['id']      # '42'
    node.title.text # 'Home'

``set_format('raw')`` makes every call return the response text instead.
A document that cannot be parsed yields ``None``.

The server reports application errors in an ``<error>`` document, sometimes
along with a 200 status. :meth:`~mtapi.api.client.MindTouchClient.call`
and :func:`~mtapi.api.common.interpret` turn these into an explicit
:class:`~mtapi.api.common.ApiResult`.
"""
