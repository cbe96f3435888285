"""
In-page scripts used by the console capture library.

Scripts receive their parameters through ``arguments[0]`` instead of string
formatting, so values never need escaping.
"""

LISTENER_VERSION = "1.0.0"

# arguments[0]: {version, bufferLimit, bufferKeep}
LISTENER_SCRIPT = r"""
const opts = arguments[0] || {};
if (!window._captured_logs) {
    window._captured_logs = [];
    window._console_listener_version = opts.version;

    const bufferLimit = opts.bufferLimit || 10000;
    const bufferKeep = opts.bufferKeep || 5000;

    const record = function(entry) {
        window._captured_logs.push(entry);
        if (window._captured_logs.length > bufferLimit) {
            window._captured_logs = window._captured_logs.slice(-bufferKeep);
        }
    };

    ['log', 'info', 'warn', 'error', 'debug'].forEach(function(method) {
        const original = console[method];
        console[method] = function(...args) {
            try {
                const stack = new Error().stack;
                const stackLines = stack ? stack.split('\n') : [];
                const callerLine = stackLines[2] || '';
                const sourceMatch = callerLine.match(/https?:\/\/[^\s]+:(\d+):(\d+)/);

                record({
                    timestamp: Date.now(),
                    level: method.toUpperCase(),
                    message: args.map(function(arg) {
                        try {
                            if (typeof arg === 'object') {
                                return JSON.stringify(arg);
                            }
                            return String(arg);
                        } catch (e) {
                            return String(arg);
                        }
                    }).join(' '),
                    source: sourceMatch ? sourceMatch[0].split(':').slice(0, -2).join(':') : 'unknown',
                    line_number: sourceMatch ? parseInt(sourceMatch[1], 10) : null,
                    column_number: sourceMatch ? parseInt(sourceMatch[2], 10) : null
                });
            } catch (e) {
                // never break the page
            }
            original.apply(console, args);
        };
    });

    window.addEventListener('error', function(event) {
        record({
            timestamp: Date.now(),
            level: 'ERROR',
            message: event.message || 'Unknown error',
            source: event.filename || 'unknown',
            line_number: event.lineno || null,
            column_number: event.colno || null
        });
    });

    window.addEventListener('unhandledrejection', function(event) {
        record({
            timestamp: Date.now(),
            level: 'ERROR',
            message: 'Unhandled Promise Rejection: ' + (event.reason || 'Unknown'),
            source: 'promise',
            line_number: null,
            column_number: null
        });
    });
}
return window._console_listener_version;
"""

RETRIEVE_SCRIPT = "return window._captured_logs || [];"

CLEAR_SCRIPT = "window._captured_logs = [];"
