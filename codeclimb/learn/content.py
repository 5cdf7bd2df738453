"""
codeclimb/learn/content.py
Hand-authored level content. Anything missing here is served from the
generated-content cache or generated on demand.
"""
from __future__ import annotations
from typing import Dict, Any

# ── Authored content registry ─────────────────────────────────────────────────
# AUTHORED_CONTENT[track][level] uses the same wire format the generator
# returns, so every source goes through one parser:
#   theory          : {content, syntax?, codeExample?}
#   quiz            : [{question, options, correctAnswer}]  (answer ∈ options)
#   codingChallenge?: {problem, tasks, constraints?, testCases, hints}
# title / topic / difficulty always come from the curriculum index.

C_CONTENT: Dict[int, Dict[str, Any]] = {
    1: {
        "theory": {
            "content": (
                "C is a general-purpose programming language created by Dennis Ritchie at "
                "Bell Labs in 1972. It is one of the most widely used languages and has "
                "influenced many modern languages like C++, Java, and Python. C gives you "
                "direct control over hardware and memory, making it perfect for system programming."
            ),
            "syntax": """#include <stdio.h>

int main() {
    // your code here
    return 0;
}""",
            "codeExample": """#include <stdio.h>

int main() {
    printf("Hello, World!\\n");
    return 0;
}""",
        },
        "quiz": [
            {"question": "Who created the C programming language?",
             "options": ["James Gosling", "Dennis Ritchie", "Bjarne Stroustrup", "Guido van Rossum"],
             "correctAnswer": "Dennis Ritchie"},
            {"question": "What is the correct file extension for C source code?",
             "options": [".cpp", ".c", ".java", ".py"],
             "correctAnswer": ".c"},
            {"question": "What does #include <stdio.h> do?",
             "options": ["Includes standard input/output library", "Includes math library",
                         "Creates a new file", "Defines a variable"],
             "correctAnswer": "Includes standard input/output library"},
        ],
        "codingChallenge": {
            "problem": 'Write a C program that prints "Hello, CodeClimb!" to the console.',
            "tasks": ["Include stdio.h", "Write a main() function",
                      'Print "Hello, CodeClimb!" with printf'],
            "testCases": [{"input": "None", "output": "Hello, CodeClimb!"}],
            "hints": ["printf takes a string literal in double quotes",
                      "Remember the semicolon after the call"],
        },
    },
    2: {
        "theory": {
            "content": (
                "A C program has a specific structure: preprocessor directives (#include), the "
                "main function, and statements inside curly braces. Every C program must have a "
                "main() function, the entry point where execution begins. Statements end with semicolons."
            ),
            "syntax": """#include <header_file>

return_type main() {
    statement1;
    statement2;
    return 0;
}""",
            "codeExample": """#include <stdio.h>

int main() {
    printf("Line 1\\n");
    printf("Line 2\\n");
    return 0;  // 0 means success
}""",
        },
        "quiz": [
            {"question": "What is the entry point of a C program?",
             "options": ["start()", "main()", "begin()", "init()"],
             "correctAnswer": "main()"},
            {"question": "What character ends most statements in C?",
             "options": ["Colon :", "Period .", "Semicolon ;", "Comma ,"],
             "correctAnswer": "Semicolon ;"},
            {"question": "What does return 0 mean in main()?",
             "options": ["The program failed", "The program ran successfully",
                         "The program should restart", "Nothing"],
             "correctAnswer": "The program ran successfully"},
        ],
        "codingChallenge": {
            "problem": "Write a C program that prints your name and age on separate lines.",
            "tasks": ["Print your name followed by a newline", "Print your age on the next line"],
            "testCases": [{"input": "None", "output": "John\n25"}],
            "hints": ["Use \\n inside the format string to start a new line"],
        },
    },
    3: {
        "theory": {
            "content": (
                "Variables are named storage locations in memory that hold data. In C, you must "
                "declare a variable before using it by specifying its data type and name. Variable "
                "names must start with a letter or underscore and cannot be C keywords."
            ),
            "syntax": """data_type variable_name;
data_type variable_name = value;""",
            "codeExample": """#include <stdio.h>

int main() {
    int age = 25;
    float height = 5.9;
    char initial = 'J';
    printf("Age: %d\\n", age);
    printf("Height: %.1f\\n", height);
    printf("Initial: %c\\n", initial);
    return 0;
}""",
        },
        "quiz": [
            {"question": "Which is a valid variable name in C?",
             "options": ["2count", "my-var", "_total", "int"],
             "correctAnswer": "_total"},
            {"question": "What happens if you use a variable without declaring it?",
             "options": ["It works fine", "Compilation error", "Runtime warning", "It defaults to 0"],
             "correctAnswer": "Compilation error"},
            {"question": "Which symbol is used for assignment in C?",
             "options": ["==", "=", ":=", "=>"],
             "correctAnswer": "="},
        ],
        "codingChallenge": {
            "problem": 'Declare an integer variable called "score" with value 100 and print it.',
            "tasks": ["Declare int score = 100", "Print it with printf and %d"],
            "testCases": [{"input": "None", "output": "100"}],
            "hints": ["%d is the format specifier for int"],
        },
    },
    4: {
        "theory": {
            "content": (
                "C has several basic data types: int (integers like 5, -3), float (decimal numbers "
                "like 3.14), double (more precise decimals), char (single characters like 'A'). "
                "Each type uses a different amount of memory: int uses 4 bytes, char 1 byte, "
                "float 4 bytes and double 8 bytes."
            ),
            "syntax": """int    a;    // 4 bytes, whole numbers
float  b;    // 4 bytes, decimal numbers
double c;    // 8 bytes, precise decimals
char   d;    // 1 byte, single character""",
            "codeExample": """#include <stdio.h>

int main() {
    printf("Size of int: %lu bytes\\n", sizeof(int));
    printf("Size of double: %lu bytes\\n", sizeof(double));
    return 0;
}""",
        },
        "quiz": [
            {"question": "Which data type is used to store a single character?",
             "options": ["int", "char", "string", "character"],
             "correctAnswer": "char"},
            {"question": "How many bytes does an int typically use?",
             "options": ["1", "2", "4", "8"],
             "correctAnswer": "4"},
            {"question": "Which type offers more precision: float or double?",
             "options": ["float", "double", "They are the same", "Neither"],
             "correctAnswer": "double"},
        ],
        "codingChallenge": {
            "problem": "Print the size of int, float, double and char using sizeof().",
            "tasks": ["Call sizeof on each type", "Print one line per type"],
            "testCases": [{"input": "None", "output": "int: 4\nfloat: 4\ndouble: 8\nchar: 1"}],
            "hints": ["sizeof returns an unsigned long, print it with %lu"],
        },
    },
    5: {
        "theory": {
            "content": (
                "Constants are values that cannot be changed once defined. In C, you can create "
                "constants using the const keyword or the #define preprocessor directive. Literals "
                "are fixed values written directly in code like 42, 3.14, or 'A'."
            ),
            "syntax": """const data_type NAME = value;
#define NAME value""",
            "codeExample": """#include <stdio.h>
#define PI 3.14159

int main() {
    const int MAX_SIZE = 100;
    float radius = 5.0;
    printf("Max size: %d\\n", MAX_SIZE);
    printf("Area: %.2f\\n", PI * radius * radius);
    return 0;
}""",
        },
        "quiz": [
            {"question": "Which keyword makes a variable constant in C?",
             "options": ["final", "constant", "const", "static"],
             "correctAnswer": "const"},
            {"question": "What is the difference between const and #define?",
             "options": ["const is type-checked, #define is not", "They are identical",
                         "#define uses memory, const does not", "const is faster"],
             "correctAnswer": "const is type-checked, #define is not"},
            {"question": "Can you change the value of a const variable?",
             "options": ["Yes, always", "Only in main()", "No, it causes a compile error", "Only with a cast"],
             "correctAnswer": "No, it causes a compile error"},
        ],
        "codingChallenge": {
            "problem": "Define PI with #define and print the circumference of a circle with radius 7.",
            "tasks": ["#define PI 3.14159", "Compute 2 * PI * r", "Print with two decimals"],
            "constraints": ["Use #define, not a variable, for PI"],
            "testCases": [{"input": "None", "output": "43.98"}],
            "hints": ["%.2f prints two decimal places"],
        },
    },
}

PYTHON_CONTENT: Dict[int, Dict[str, Any]] = {
    1: {
        "theory": {
            "content": (
                "Python is a high-level, interpreted programming language created by Guido van "
                "Rossum in 1991. Known for its clean syntax and readability, Python uses indentation "
                "instead of braces to define code blocks. It supports procedural, object-oriented, "
                "and functional programming."
            ),
            "syntax": """# Python uses indentation
print("Hello")

# No semicolons needed
# No curly braces for blocks""",
            "codeExample": """# Your first Python program
print("Hello, World!")
print("Welcome to Python!")

name = "Alice"
age = 30
print(f"I'm {name}, age {age}")""",
        },
        "quiz": [
            {"question": "Who created Python?",
             "options": ["Dennis Ritchie", "Guido van Rossum", "James Gosling", "Brendan Eich"],
             "correctAnswer": "Guido van Rossum"},
            {"question": "What defines code blocks in Python?",
             "options": ["Curly braces", "Parentheses", "Indentation", "Semicolons"],
             "correctAnswer": "Indentation"},
            {"question": "What function displays output in Python?",
             "options": ["echo()", "console.log()", "printf()", "print()"],
             "correctAnswer": "print()"},
        ],
        "codingChallenge": {
            "problem": 'Print "Hello, CodeClimb!" on the first line and your name on the second line.',
            "tasks": ['Print "Hello, CodeClimb!"', "Print your name"],
            "testCases": [{"input": "None", "output": "Hello, CodeClimb!\nAlice"}],
            "hints": ["Each print() call ends with a newline"],
        },
    },
    2: {
        "theory": {
            "content": (
                "Variables in Python are created the moment you assign a value. No declaration or "
                "type keyword is needed; Python determines the type at runtime. Variable names must "
                "start with a letter or underscore, are case-sensitive, and cannot be keywords."
            ),
            "syntax": """variable_name = value
x = 10          # integer
y = 3.14        # float
name = "Hello"  # string
is_ok = True    # boolean""",
            "codeExample": """name = "John"
age = 25
print(name)       # John
print(type(age))  # <class 'int'>

a, b, c = 1, 2, 3""",
        },
        "quiz": [
            {"question": "Do you need to declare variable types in Python?",
             "options": ["Yes, always", "No, Python infers them", "Only for integers", "Only for strings"],
             "correctAnswer": "No, Python infers them"},
            {"question": "Which is a valid variable name?",
             "options": ["2name", "my-var", "_count", "class"],
             "correctAnswer": "_count"},
            {"question": "What does type(x) return?",
             "options": ["The value of x", "The data type of x", "The size of x", "An error"],
             "correctAnswer": "The data type of x"},
        ],
        "codingChallenge": {
            "problem": "Create variables for your name (string), age (int) and height (float), then print all three.",
            "tasks": ["Assign three variables", "Print each on its own line"],
            "testCases": [{"input": "None", "output": "Alice\n25\n5.6"}],
            "hints": ["print() accepts any type"],
        },
    },
    3: {
        "theory": {
            "content": (
                "Python has several built-in data types: int, float, str, bool and NoneType. You "
                "can check a value's type with type() and convert between types using int(), "
                "float(), str() and bool(). Python integers have arbitrary precision."
            ),
            "syntax": """type(variable)

int("42")      # string to int
float("3.14")  # string to float
str(100)       # int to string""",
            "codeExample": """num_str = "100"
num = int(num_str)
print(num + 50)      # 150""",
        },
        "quiz": [
            {"question": "What type is the value True in Python?",
             "options": ["int", "str", "bool", "bit"],
             "correctAnswer": "bool"},
            {"question": 'What does int("42") return?',
             "options": ['"42"', "42", "Error", "None"],
             "correctAnswer": "42"},
            {"question": "What is None in Python?",
             "options": ["Zero", "Empty string", "Absence of value", "False"],
             "correctAnswer": "Absence of value"},
        ],
        "codingChallenge": {
            "problem": 'Convert the string "25" to an integer, add 10, and print the result.',
            "tasks": ["Convert with int()", "Add 10", "Print the result"],
            "testCases": [{"input": "None", "output": "35"}],
            "hints": ["The simulator only shows literal output, so print the final number"],
        },
    },
}

JAVASCRIPT_CONTENT: Dict[int, Dict[str, Any]] = {
    1: {
        "theory": {
            "content": (
                "JavaScript is a high-level, dynamic programming language created by Brendan Eich "
                "in 1995. It is the language of the web and runs in every browser. With Node.js it "
                "can also power servers."
            ),
            "syntax": """// Single-line comment
/* Multi-line comment */

console.log("Hello");""",
            "codeExample": """console.log("Hello, World!");

let name = "Alice";
const age = 25;
console.log("Name: " + name);""",
        },
        "quiz": [
            {"question": "Who created JavaScript?",
             "options": ["Dennis Ritchie", "Guido van Rossum", "Brendan Eich", "James Gosling"],
             "correctAnswer": "Brendan Eich"},
            {"question": "What method logs to the browser console?",
             "options": ["print()", "console.log()", "System.out.println()", "echo()"],
             "correctAnswer": "console.log()"},
            {"question": "Where does JavaScript primarily run?",
             "options": ["Only on servers", "In web browsers", "Only in terminals", "In databases"],
             "correctAnswer": "In web browsers"},
        ],
        "codingChallenge": {
            "problem": 'Log "Hello, CodeClimb!" to the console.',
            "tasks": ["Use console.log"],
            "testCases": [{"input": "None", "output": "Hello, CodeClimb!"}],
            "hints": ["Strings can use single or double quotes"],
        },
    },
    2: {
        "theory": {
            "content": (
                "JavaScript has three ways to declare variables: let (block-scoped, reassignable), "
                "const (block-scoped, not reassignable) and var (function-scoped, older style). "
                "Modern code prefers const by default and let when reassignment is needed."
            ),
            "syntax": """let x = 10;     // can be reassigned
const y = 20;   // cannot be reassigned
var z = 30;     // old style, avoid""",
            "codeExample": """let score = 0;
score = 10;

const PI = 3.14159;
console.log(score, PI);""",
        },
        "quiz": [
            {"question": "Which keyword creates a constant variable?",
             "options": ["let", "var", "const", "final"],
             "correctAnswer": "const"},
            {"question": "Can you reassign a let variable?",
             "options": ["Yes", "No", "Only numbers", "Only strings"],
             "correctAnswer": "Yes"},
            {"question": "Why is var generally avoided?",
             "options": ["It is slower", "It has confusing scoping", "It cannot hold strings", "It is deprecated"],
             "correctAnswer": "It has confusing scoping"},
        ],
        "codingChallenge": {
            "problem": "Declare a const for your birth year, a let for your current age, and log both.",
            "tasks": ["Declare the const", "Declare the let", "Log each value"],
            "testCases": [{"input": "None", "output": "2000\n25"}],
            "hints": ["One console.log per line of output"],
        },
    },
}

JAVA_CONTENT: Dict[int, Dict[str, Any]] = {
    1: {
        "theory": {
            "content": (
                "Java is a high-level, object-oriented language created by James Gosling at Sun "
                "Microsystems in 1995. Java code compiles to bytecode that runs on any Java Virtual "
                "Machine (JVM), which is where \"Write Once, Run Anywhere\" comes from."
            ),
            "syntax": """public class ClassName {
    public static void main(String[] args) {
        // code here
    }
}""",
            "codeExample": """public class HelloWorld {
    public static void main(String[] args) {
        System.out.println("Hello, World!");
    }
}""",
        },
        "quiz": [
            {"question": "Who created Java?",
             "options": ["Dennis Ritchie", "James Gosling", "Guido van Rossum", "Bjarne Stroustrup"],
             "correctAnswer": "James Gosling"},
            {"question": "What does JVM stand for?",
             "options": ["Java Very Modern", "Java Virtual Machine", "Java Version Manager", "Java Variable Memory"],
             "correctAnswer": "Java Virtual Machine"},
            {"question": "What is the correct method to print output in Java?",
             "options": ["print()", "console.log()", "System.out.println()", "printf()"],
             "correctAnswer": "System.out.println()"},
        ],
        "codingChallenge": {
            "problem": 'Write a Java program that prints "Hello, CodeClimb!" to the console.',
            "tasks": ["Declare a public class Main", "Add a main method", "Print the greeting"],
            "testCases": [{"input": "None", "output": "Hello, CodeClimb!"}],
            "hints": ["System.out.println adds the newline for you"],
        },
    },
}

CPP_CONTENT: Dict[int, Dict[str, Any]] = {
    1: {
        "theory": {
            "content": (
                "C++ is a general-purpose language created by Bjarne Stroustrup in 1979 as an "
                "extension of C. It adds object-oriented features while keeping C's performance, "
                "and is used in game engines, browsers and other performance-critical software."
            ),
            "syntax": """#include <iostream>
using namespace std;

int main() {
    cout << "text" << endl;
    return 0;
}""",
            "codeExample": """#include <iostream>
using namespace std;

int main() {
    cout << "Hello, World!" << endl;
    return 0;
}""",
        },
        "quiz": [
            {"question": "Who created C++?",
             "options": ["Dennis Ritchie", "Bjarne Stroustrup", "James Gosling", "Guido van Rossum"],
             "correctAnswer": "Bjarne Stroustrup"},
            {"question": "What header is needed for cout?",
             "options": ["<stdio.h>", "<iostream>", "<conio.h>", "<string>"],
             "correctAnswer": "<iostream>"},
            {"question": "What does endl do?",
             "options": ["Ends the program", "Inserts a new line", "Clears the screen", "Pauses output"],
             "correctAnswer": "Inserts a new line"},
        ],
        "codingChallenge": {
            "problem": 'Write a C++ program that prints "Hello, CodeClimb!" using cout.',
            "tasks": ["Include iostream", "Stream the greeting to cout"],
            "testCases": [{"input": "None", "output": "Hello, CodeClimb!"}],
            "hints": ["cout << \"text\" << endl;"],
        },
    },
}

HTML_CONTENT: Dict[int, Dict[str, Any]] = {
    1: {
        "theory": {
            "content": (
                "HTML (HyperText Markup Language) is the standard language for creating web pages. "
                "It uses tags enclosed in angle brackets, usually in pairs: an opening tag <tag> and "
                "a closing tag </tag>. HTML describes structure, not styling."
            ),
            "syntax": """<!DOCTYPE html>
<html>
<head>
    <title>Page Title</title>
</head>
<body>
    <!-- content goes here -->
</body>
</html>""",
            "codeExample": """<!DOCTYPE html>
<html>
<head><title>My First Page</title></head>
<body>
    <h1>Hello, World!</h1>
    <p>This is my first web page.</p>
</body>
</html>""",
        },
        "quiz": [
            {"question": "What does HTML stand for?",
             "options": ["HyperText Markup Language", "High Tech Modern Language",
                         "Home Tool Markup Language", "Hyperlink Text Markup Language"],
             "correctAnswer": "HyperText Markup Language"},
            {"question": "Which tag defines the largest heading?",
             "options": ["<heading>", "<h6>", "<h1>", "<head>"],
             "correctAnswer": "<h1>"},
            {"question": "What does <!DOCTYPE html> declare?",
             "options": ["A comment", "The document is HTML5", "A variable", "A style rule"],
             "correctAnswer": "The document is HTML5"},
        ],
        "codingChallenge": {
            "problem": 'Create a page titled "My Page" with an h1 heading that says "Welcome".',
            "tasks": ["Add the doctype", "Set the title", "Add the h1"],
            "testCases": [{"input": "None", "output": 'A page with heading "Welcome"'}],
            "hints": ["The <title> lives inside <head>"],
        },
    },
}

CSS_CONTENT: Dict[int, Dict[str, Any]] = {
    1: {
        "theory": {
            "content": (
                "CSS (Cascading Style Sheets) controls the visual presentation of HTML documents: "
                "colors, fonts, spacing, layout and animation. Styles can be applied inline, in a "
                "<style> tag, or from an external .css file."
            ),
            "syntax": """selector {
    property: value;
}""",
            "codeExample": """h1 {
    color: #333;
    text-align: center;
}""",
        },
        "quiz": [
            {"question": "What does CSS stand for?",
             "options": ["Cascading Style Sheets", "Computer Style Sheets",
                         "Creative Style Syntax", "Colorful Style System"],
             "correctAnswer": "Cascading Style Sheets"},
            {"question": "Which method of applying CSS is most recommended?",
             "options": ["Inline styles", "Internal <style> tag", "External stylesheet", "JavaScript"],
             "correctAnswer": "External stylesheet"},
            {"question": "What separates CSS from HTML?",
             "options": ["CSS handles structure, HTML handles style",
                         "CSS handles style, HTML handles structure",
                         "They do the same thing", "CSS is a programming language"],
             "correctAnswer": "CSS handles style, HTML handles structure"},
        ],
        "codingChallenge": {
            "problem": "Write CSS that makes all h1 elements blue and centered.",
            "tasks": ["Select h1", "Set color", "Set text-align"],
            "testCases": [{"input": "None", "output": "Blue centered headings"}],
            "hints": ["text-align: center;"],
        },
    },
}

SQL_CONTENT: Dict[int, Dict[str, Any]] = {
    1: {
        "theory": {
            "content": (
                "SQL (Structured Query Language) is used to read and change data stored in "
                "relational databases. Data lives in tables made of rows and columns, and a SELECT "
                "statement describes which columns and rows you want back."
            ),
            "syntax": """SELECT column1, column2
FROM table_name;""",
            "codeExample": """SELECT name, salary
FROM employees;""",
        },
        "quiz": [
            {"question": "Which statement reads rows from a table?",
             "options": ["GET", "SELECT", "READ", "FETCH"],
             "correctAnswer": "SELECT"},
            {"question": "What does SELECT * return?",
             "options": ["The first column", "All columns", "The row count", "Nothing"],
             "correctAnswer": "All columns"},
            {"question": "A table is made of:",
             "options": ["Rows and columns", "Files and folders", "Keys only", "Functions"],
             "correctAnswer": "Rows and columns"},
        ],
        "codingChallenge": {
            "problem": "List the name of every student in the students table.",
            "tasks": ["SELECT the name column", "FROM students"],
            "testCases": [{"input": "students table",
                           "output": "name\nAlice\nBob\nCharlie\nDiana\nEve\nFrank"}],
            "hints": ["Only one column is needed"],
        },
    },
}

AUTHORED_CONTENT: Dict[str, Dict[int, Dict[str, Any]]] = {
    "c": C_CONTENT,
    "cpp": CPP_CONTENT,
    "java": JAVA_CONTENT,
    "python": PYTHON_CONTENT,
    "html": HTML_CONTENT,
    "css": CSS_CONTENT,
    "javascript": JAVASCRIPT_CONTENT,
    "sql": SQL_CONTENT,
}


def get_authored(track: str, level: int) -> Dict[str, Any] | None:
    return AUTHORED_CONTENT.get(track, {}).get(level)
