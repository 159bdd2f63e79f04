"""Response renderers: JSON, text, data, streams, redirects, HTML, MessagePack, protobuf, XML and YAML."""